from dataclasses import dataclass, field
from datetime import datetime

from edusphere.domain.common.clock import utc_now


@dataclass
class SocialLinks:
    linkedin: str | None = None
    twitter: str | None = None
    youtube: str | None = None


@dataclass
class Instructor:
    user: str
    title: str
    bio: str = ""
    expertise: list[str] = field(default_factory=list)
    social_links: SocialLinks = field(default_factory=SocialLinks)
    rating_average: float = 0.0
    rating_count: int = 0
    total_students: int = 0
    total_courses: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    _id: str | None = None
