from pydantic import BaseModel


class TokenPair(BaseModel):
    access_token: str
    token_type: str = "bearer"
