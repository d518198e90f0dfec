from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ceialmilk.core.security import validate_token
from ceialmilk.database import get_db
from ceialmilk.modules.auth.repository import UsuarioRepository
from . import schemas, services

router = APIRouter(prefix="/api/auth", tags=["Authentication"])

BEARER_PREFIX = "Bearer "


def _clean_token(raw: str) -> str:
    token = raw.strip().strip('"').strip()
    if token.startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):].strip()
    return token


@router.post("/login", response_model=schemas.AuthResponse)
async def login(credentials: schemas.LoginRequest, db: AsyncSession = Depends(get_db)):
    auth_service = services.AuthService(UsuarioRepository(db))
    response = await auth_service.login_user(credentials.email, credentials.password)
    if not response:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return response


@router.post("/validate", response_model=bool)
async def validate(request: Request):
    """Tell whether a token is currently valid. The body is the raw token."""
    raw = (await request.body()).decode("utf-8", errors="replace")
    return validate_token(_clean_token(raw))
