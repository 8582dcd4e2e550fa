from pydantic import BaseModel
from typing import Literal

UserRole = Literal["instructor", "student"]

class UserContext(BaseModel):
    user_id: str
    role: UserRole
    name: str = ""
    email: str = ""

    @property
    def is_instructor(self) -> bool:
        return self.role == "instructor"

    @property
    def is_student(self) -> bool:
        return self.role == "student"
