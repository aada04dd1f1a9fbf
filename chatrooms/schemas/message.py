from pydantic import BaseModel, Field

class AuthorResponse(BaseModel):
    id: int
    username: str

class MessageCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=4000)

class MessageResponse(BaseModel):
    chat_id: int = Field(..., alias="chatId")
    text: str
    author: AuthorResponse

    class Config:
        populate_by_name = True
