from pydantic import BaseModel
from typing import List, Optional


class EmailMessage(BaseModel):
    to: List[str]
    subject: str
    html: str
    reply_to: Optional[str] = None
