from typing import Optional

from fastapi import Header, HTTPException, Request


def current_user(x_user_id: Optional[str] = Header(default=None)) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="X-User-Id header is required")
    return x_user_id


def get_store(request: Request):
    return request.app.state.store


def get_controller(request: Request):
    return request.app.state.controller


def get_catalog(request: Request):
    return request.app.state.catalog
