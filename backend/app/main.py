# backend/app/main.py
from fastapi import FastAPI

from backend.app.api.today import router as today_router

app = FastAPI(title="mailmind API")
app.include_router(today_router, prefix="/api")
