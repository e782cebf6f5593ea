from dataclasses import dataclass, field
from datetime import datetime

from edusphere.domain.common.clock import utc_now
from edusphere.domain.common.slug import unique_slug


def normalize_category_name(name: str) -> str:
    return name.strip().lower()


@dataclass
class Category:
    name: str
    description: str = ""
    icon: str | None = None
    slug: str = ""
    is_active: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    _id: str | None = None

    def __post_init__(self) -> None:
        self.name = normalize_category_name(self.name)
        if not self.slug:
            self.slug = unique_slug(self.name)

    def rename(self, name: str) -> None:
        name = normalize_category_name(name)
        if name == self.name:
            return
        self.name = name
        self.slug = unique_slug(name)
