from typing import Annotated, Optional
from fastapi import Header, HTTPException, status
from pydantic import ValidationError as PydanticValidationError

from app.schemas.context import UserContext


class AuthService:
    """
    L'identita' arriva da un collaboratore esterno (gateway / sessione) negli header.
    Ci fidiamo del valore: nessuna verifica di credenziali qui.
    """

    @staticmethod
    async def get_current_user(
        x_user_id: Annotated[Optional[str], Header()] = None,
        x_user_role: Annotated[Optional[str], Header()] = None,
        x_user_name: Annotated[str, Header()] = "",
        x_user_email: Annotated[str, Header()] = "",
    ) -> UserContext:
        if not x_user_id or not x_user_role:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Missing X-User-Id / X-User-Role headers",
            )
        try:
            return UserContext(
                user_id=x_user_id,
                role=x_user_role.strip().lower(),
                name=x_user_name,
                email=x_user_email,
            )
        except PydanticValidationError:
            raise HTTPException(status_code=400, detail=f"Ruolo non valido: {x_user_role}")
