from pydantic import BaseModel


class MenuItemRead(BaseModel):
    id: int
    name: str
    description: str
    price: int
    category: str
    image: str
    is_available: bool

    class Config:
        from_attributes = True
