"""
Per-request GraphQL context: the request's database session and the
principal decoded from the Authorization header (None when anonymous).

Resolvers touch a synchronous session and bcrypt, so they are wrapped with
``blocking``: the body runs on Starlette's worker threadpool, leaving the
event loop free for other requests. A per-request lock keeps sibling
resolvers from using the shared session at the same time.
"""

import functools
from typing import Optional

import anyio
from fastapi import Depends, Header
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
from strawberry.fastapi import BaseContext
from strawberry.types import Info

from app.database import get_db
from app.security import Principal, principal_from_authorization


class GraphQLContext(BaseContext):
    def __init__(self, db: Session, principal: Optional[Principal]):
        super().__init__()
        self.db = db
        self.principal = principal
        self.db_lock = anyio.Lock()


def get_principal(authorization: Optional[str] = Header(None)) -> Optional[Principal]:
    """A bad or missing token yields an anonymous request, never a 401."""
    return principal_from_authorization(authorization)


async def get_context(db: Session = Depends(get_db),
                      principal: Optional[Principal] = Depends(get_principal)) -> GraphQLContext:
    return GraphQLContext(db=db, principal=principal)


def blocking(resolver):
    """
    Turn a synchronous resolver into an async one that runs on a worker thread.

    The wrapper keeps the resolver's signature (``functools.wraps``), so
    Strawberry still derives arguments and the return type from it.
    """

    @functools.wraps(resolver)
    async def wrapper(self, info: Info, *args, **kwargs):
        async with info.context.db_lock:
            return await run_in_threadpool(resolver, self, info, *args, **kwargs)

    return wrapper
