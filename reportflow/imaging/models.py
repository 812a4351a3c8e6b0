from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class GeneratedImage:
    url: str
    prompt: str
    model: str
    generated_at: datetime
