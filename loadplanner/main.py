from dotenv import load_dotenv

load_dotenv()  # before the routes import so LOG_DIR / LOG_LEVEL from .env reach the logger

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from loadplanner.routes import planning_routes

app = FastAPI(title="Load Planner")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(planning_routes, prefix="/planning")
