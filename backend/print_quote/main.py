import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from print_quote.api import admin, chat, quotes, validate
from print_quote.db.session import init_db

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",") if o.strip()]

app = FastAPI(title="Print Quote Estimator")

# CORS for frontend dev
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(quotes.router, prefix="/quotes", tags=["quotes"])
app.include_router(validate.router, prefix="/validate", tags=["validate"])
app.include_router(chat.router, prefix="/chat", tags=["chat"])
app.include_router(admin.router, prefix="/admin", tags=["admin"])


@app.on_event("startup")
def on_startup():
    init_db()


@app.get("/")
async def root():
    return {"status": "ok", "service": "print-quote-estimator"}
