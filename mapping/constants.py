import os

from typing import Literal

import dotenv

dotenv.load_dotenv()

NAME_STYLE: Literal["snake", "pascal", "strip", "none"] = os.getenv(
    "RECORD_PARSER_NAME_STYLE", "snake"
).lower()

BLANK_AS_NONE: bool = os.getenv("RECORD_PARSER_BLANK_AS_NONE", "true").lower() == "true"

LOG_LEVEL: str = os.getenv("RECORD_PARSER_LOG_LEVEL", "INFO").upper()
