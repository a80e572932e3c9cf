from contextlib import asynccontextmanager
from datetime import date

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from meal_calendar.config import configure_logging, persistence_backend
from meal_calendar.core.planner import Planner, default_gateway
from meal_calendar.db.database import init_db
from app.routers import calendar, meal_plan, shopping


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if persistence_backend() != "memory":
        init_db()
    app.state.planner = Planner.open(default_gateway())
    app.state.week_anchor = date.today()
    yield


app = FastAPI(lifespan=lifespan)


@app.get("/")
async def root():
    return RedirectResponse(url="/meal-plan/week", status_code=302)


app.include_router(calendar.router)
app.include_router(meal_plan.router)
app.include_router(shopping.router)
