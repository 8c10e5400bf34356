from pydantic import BaseModel

WELCOME_MESSAGE = "Welcome to the Simple Docker App!"


class Welcome(BaseModel):
    message: str = WELCOME_MESSAGE


class Health(BaseModel):
    status: str = "ok"
    timestamp: str
    uptime: int


class ErrorBody(BaseModel):
    error: str = "Not Found"
