"""Data models for external title-index payloads."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

YEAR_LENGTH = 4


class AiredRange(BaseModel):
    """Airing interval of a title; only the start is used."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    start: Optional[str] = Field(default=None, alias="from")


class TitleCandidate(BaseModel):
    """One search hit from the anime title index.

    Search hits come back in the index's own relevance order; callers rely on
    that order for tie-breaking, so candidates are kept in a plain list.
    """

    model_config = ConfigDict(extra="ignore")

    mal_id: int
    title: Optional[str] = None
    title_english: Optional[str] = None
    title_synonyms: List[str] = Field(default_factory=list)
    year: Optional[int] = None
    aired: Optional[AiredRange] = None

    @field_validator("title_synonyms", mode="before")
    @classmethod
    def _drop_empty_synonyms(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, list):
            return [s for s in value if isinstance(s, str) and s]
        return value

    def release_year(self) -> Optional[int]:
        """Return the year, falling back to the first year of the airing range."""
        if self.year:
            return self.year
        start = self.aired.start if self.aired else None
        if start and len(start) >= YEAR_LENGTH and start[:YEAR_LENGTH].isdigit():
            return int(start[:YEAR_LENGTH])
        return None

    def titles(self) -> List[str]:
        """All known titles: main, English, then synonyms."""
        names = [self.title, self.title_english, *self.title_synonyms]
        return [name for name in names if name]
