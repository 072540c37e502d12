"""Reference data schemas (categories, leaderboard, prompt suggestions)."""

from pydantic import BaseModel, ConfigDict


class TagOut(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    usage_count: int

    model_config = ConfigDict(from_attributes=True)


class CategoryOut(BaseModel):
    id: str
    name: str
    slug: str
    description: str
    sort_order: int
    tags: list[TagOut]

    model_config = ConfigDict(from_attributes=True)


class LeaderboardEntryOut(BaseModel):
    model_id: str
    model_name: str
    provider: str
    rank: int
    score: float
    wins: int
    losses: int
    ties: int
    total_battles: int
    win_rate: float
    quality_score: float
    is_provisional: bool

    # "model_" prefixed fields are regular data here
    model_config = ConfigDict(protected_namespaces=())


class LeaderboardOut(BaseModel):
    category: str
    tags: list[str]
    entries: list[LeaderboardEntryOut]


class PromptSuggestionOut(BaseModel):
    id: str
    title: str
    text: str
    category: str

    model_config = ConfigDict(from_attributes=True)
