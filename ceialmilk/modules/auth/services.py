import logging
from typing import Optional

from ceialmilk.core.security import create_access_token, get_password_hash, verify_password
from ceialmilk.modules.auth.repository import UsuarioRepository
from . import schemas

logger = logging.getLogger(__name__)

ROLE_PREFIX = "ROLE_"
DEFAULT_PERFIL = "USER"

# Checked against when the email is unknown so every failed login costs one bcrypt round
_DUMMY_HASH = get_password_hash("ceialmilk-dummy-password")


class AuthService:
    def __init__(self, repository: UsuarioRepository):
        self.repository = repository

    async def login_user(self, email: str, password: str) -> Optional[schemas.AuthResponse]:
        """
        Issue a token for valid credentials.

        Returns None for an unknown email, a disabled account, a wrong
        password or a failed lookup, without telling them apart.
        """
        try:
            user = await self.repository.find_by_email(email)
            if user is None:
                verify_password(password, _DUMMY_HASH)
                logger.warning(f"Login failed for {email}")
                return None
            password_ok = verify_password(password, user.senha)
            if not password_ok or not user.is_enabled:
                logger.warning(f"Login failed for {email}")
                return None
        except Exception as e:
            logger.warning(f"Login failed for {email}: {type(e).__name__}")
            return None

        authorities = [f"{ROLE_PREFIX}{user.perfil}"] if user.perfil else []
        token = create_access_token(subject=user.email, authorities=authorities)

        perfil = DEFAULT_PERFIL
        if authorities:
            perfil = authorities[0].replace(ROLE_PREFIX, "", 1)
        return schemas.AuthResponse(token=token, email=user.email, perfil=perfil)
