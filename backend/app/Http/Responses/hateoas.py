from typing import List

from pydantic import BaseModel


class Link(BaseModel):
    href: str
    method: str
    rel: str


class HateoasModel(BaseModel):
    # Subclasses declare: links: List[Link] = Field(default_factory=list, alias="_links")
    links: List[Link]

    def add_link(self, rel: str, href: str, method: str = "GET"):
        self.links.append(Link(rel=rel, href=href, method=method))
