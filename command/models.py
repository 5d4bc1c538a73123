from enum import Enum
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ChatPayloadType(str, Enum):
    INFO = "info"
    ERROR = "error"
    MESSAGE = "message"
    USERLIST = "userlist"


class ChatPayload(BaseModel):
    type: ChatPayloadType
    text: str = ""
    responder: Optional[str] = None
    users: Optional[list[str]] = None
    timestamp: str = ""

    def __init__(self, **data):
        if not data.get("timestamp"):
            data["timestamp"] = datetime.now().strftime("%H:%M:%S")
        super().__init__(**data)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)
