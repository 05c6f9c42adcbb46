from pydantic import BaseModel, Field
from typing import Optional

# Schema for user authentication credentials
class UserLogin(BaseModel):
    username: str
    password: str

# Schema for user registration requests (bcrypt only uses the first 72 bytes)
class UserCreate(BaseModel):
    username: str = Field(min_length=1)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    password: str = Field(min_length=6, max_length=72)

# Output schema for user profile details
class UserResponse(BaseModel):
    id: int
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: str

    class Config:
        from_attributes = True

# Schema for JWT authentication token response
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
