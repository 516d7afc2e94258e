from typing import List

from pydantic import BaseModel

from ..core.security import Role


class MenuItem(BaseModel):
    title: str
    url: str


class MenuSection(BaseModel):
    label: str
    items: List[MenuItem]


class NavigationResponse(BaseModel):
    role: Role
    home: str
    sections: List[MenuSection]
