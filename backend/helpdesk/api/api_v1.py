from fastapi import APIRouter

from helpdesk.routers import auth, groups, tickets

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(groups.router)
api_router.include_router(tickets.router)
