# backend/depotdb/security.py

"""
Actor identity for depot requests.

The depot terminals pick an operator by name; proving who that operator is
belongs to the identity provider in front of this service. The core records
whatever identity string it receives and never validates it, so the only
thing enforced here is that a mutating request names somebody.
"""

from __future__ import annotations

import os

from fastapi import Header, HTTPException, status

ACTOR_HEADER = os.getenv("ACTOR_HEADER", "X-Actor")


def get_actor(x_actor: str = Header(..., alias=ACTOR_HEADER)) -> str:
    """
    FastAPI dependency returning the operator identity for this request.
    """
    actor = (x_actor or "").strip()
    if not actor:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{ACTOR_HEADER} header must name the operator.",
        )
    return actor
