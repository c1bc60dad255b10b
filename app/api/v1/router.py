from fastapi import APIRouter
from app.api.v1.endpoints import websites, knowledge, ai, chat_requests, prompts, code_configs

api_router = APIRouter()
api_router.include_router(websites.router, prefix="/websites", tags=["websites"])
api_router.include_router(knowledge.router, prefix="/websites", tags=["knowledge"])
api_router.include_router(ai.router, prefix="/ai", tags=["ai"])
api_router.include_router(chat_requests.router, prefix="/chat-requests", tags=["chat-requests"])
api_router.include_router(prompts.router, prefix="/prompts", tags=["prompts"])
api_router.include_router(code_configs.router, prefix="/code-config", tags=["code-config"])
