from dataclasses import dataclass, field
from datetime import datetime

from edusphere.domain.common.clock import utc_now


@dataclass
class Lesson:
    title: str
    course: str
    content: str = ""
    video_url: str | None = None
    duration: int = 0
    order: int = 0
    is_free_preview: bool = False
    is_active: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    _id: str | None = None
