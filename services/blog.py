from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class BlogPost:
    id: str
    title: str
    summary: str
    content: str
    date: str
    author: str


# Static posts (no CMS behind the blog yet)
POSTS: List[BlogPost] = [
    BlogPost(
        id="1",
        title="איך להתכונן נכון לתקופת המבחנים?",
        summary="טיפים וטריקים שיעזרו לכם לעבור את הסמסטר בשלום ובציונים גבוהים.",
        content="...",
        date="10/10/2023",
        author="מערכת Circademic",
    ),
    BlogPost(
        id="2",
        title="חישוב ממוצע: למה זה חשוב?",
        summary="המדריך המלא להבנת שיטות החישוב השונות באקדמיה.",
        content="...",
        date="05/09/2023",
        author="דני סטודנט",
    ),
]


def list_posts() -> List[BlogPost]:
    return list(POSTS)
