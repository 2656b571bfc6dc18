# admin.py
from fastapi import APIRouter, Depends, Header, HTTPException, Request

router = APIRouter()


def check_admin_token(request: Request, x_admin_token: str = Header(None, alias="x-admin-token")):
    if not x_admin_token or x_admin_token != request.app.state.settings.admin_token:
        raise HTTPException(status_code=403, detail="Invalid admin token")
    return True


@router.post("/admin/clear-cache", dependencies=[Depends(check_admin_token)])
async def clear_cache_endpoint(request: Request):
    request.app.state.orchestrator.cache.clear()
    return {"status": "ok", "message": "Cache cleared"}
