"""
Session holder: supplies the identifier of the calling user.

Authentication is handled upstream (gateway or client app); this service
only trusts the user id it is handed in the X-User-Id header.
"""

from typing import Optional

from fastapi import Header

from rezervasyon.core.exceptions import MissingUserId

USER_ID_HEADER = "X-User-Id"


def parse_user_id(raw: Optional[str]) -> int:
    if raw is None or not raw.strip().isdecimal():
        raise MissingUserId()
    user_id = int(raw.strip())
    if user_id < 1:
        raise MissingUserId()
    return user_id


async def get_current_user_id(x_user_id: Optional[str] = Header(None, alias=USER_ID_HEADER)) -> int:
    return parse_user_id(x_user_id)
