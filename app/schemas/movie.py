from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MovieBody(BaseModel):
    """Incoming movie fields; `movietitle` on the wire, `title` in Python.

    Every field is optional at the schema level: which ones are required
    depends on the verb (POST, PUT or PATCH) and is enforced by the store.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, alias="movietitle")
    language: Optional[str] = None
    watched: Optional[bool] = None

    def present_fields(self) -> dict:
        """Fields the client actually sent, by attribute name.

        A null `movietitle`/`language` is dropped; an explicit null `watched`
        reads as False.
        """
        fields = {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None or k == "watched"}
        if "watched" in fields:
            fields["watched"] = bool(fields["watched"])
        return fields

    def sent_watched(self) -> Optional[bool]:
        """`watched` as sent: None when absent, False for an explicit null."""
        if "watched" not in self.model_fields_set:
            return None
        return bool(self.watched)


class MovieRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str = Field(..., alias="movietitle")
    language: str
    watched: bool

    @classmethod
    def from_movie(cls, movie) -> "MovieRead":
        return cls(id=movie.id, title=movie.title, language=movie.language, watched=movie.watched)
