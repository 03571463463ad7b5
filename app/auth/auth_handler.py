"""
Bearer token verification and tenant resolution

Tokens are issued by the identity provider; this service only verifies them
and maps the token subject onto a local tenant row.
"""

from datetime import datetime, timedelta
from typing import Optional
from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from app.database import get_db
from app.models.user import User
from app.services.user_service import UserService

security = HTTPBearer()

def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

class AuthHandler:
    """Signs and verifies JWT access tokens"""

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None):
        """Create a JWT access token (used by the identity provider and tests)"""
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

    def verify_token(self, token: str) -> dict:
        """Verify and decode a JWT token"""
        try:
            return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        except JWTError:
            raise _credentials_exception()

auth_handler = AuthHandler()

def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> dict:
    """Dependency returning the verified token claims"""
    payload = auth_handler.verify_token(credentials.credentials)

    subject: str = payload.get("sub")
    if subject is None:
        raise _credentials_exception()

    return {
        "external_id": str(subject),
        "email": payload.get("email"),
        "first_name": payload.get("first_name"),
        "last_name": payload.get("last_name"),
    }

async def get_current_tenant(
    claims: dict = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> User:
    """Dependency returning the tenant row, provisioning it on first sight"""
    user_service = UserService(db)
    return await user_service.ensure_user(**claims)
