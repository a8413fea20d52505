# -*- coding: utf-8 -*-
"""Resolve the acting user for every record-store call.

Identity is issued upstream (mobile client session); this service only needs
an explicit, path-safe user id per request.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request

USER_HEADER = "x-user-id"

_USER_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def get_user_id_from_request(request: Request) -> Optional[str]:
    header = request.headers.get(USER_HEADER) or ""
    return header.strip() or None


def get_current_user(request: Request) -> Dict[str, Any]:
    # If middleware already resolved it, reuse it.
    user = getattr(request.state, "user", None)
    if user:
        return user

    user_id = get_user_id_from_request(request)
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    if not _USER_ID_RE.match(user_id):
        raise HTTPException(status_code=400, detail="Invalid user id")

    user = {"id": user_id}
    request.state.user = user
    return user
