import json
from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import verify_jwt


def serialize_json(value) -> str:
    # Non-ASCII stays literal in stored JSON; audit search matches on that text.
    return json.dumps(value, ensure_ascii=False)


engine = create_async_engine(
    ApplicationConfig.DB_URI, echo=False, future=True, json_serializer=serialize_json
)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing user_id and optionally tenant_id

    Raises:
        ClientError: 401 if token is missing, invalid or expired
    """
    if credentials is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Bearer token required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    payload = verify_jwt(credentials.credentials)
    if payload is None or not payload.get("user_id"):
        raise ClientError(
            Error("INVALID_TOKEN", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return payload
