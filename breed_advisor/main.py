from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from breed_advisor.api.rest_routes.breed_recommendation import (
    router as breed_recommendation_router,
)
from breed_advisor.api.rest_routes.breeds import router as breeds_router
from breed_advisor.api.websocket.endpoints import router as websocket_router
from breed_advisor.core.logging_config import configure_logging
from breed_advisor.services.breed_catalog import load_breed_catalog
from breed_advisor.services.breed_narrative import generate_breed_narratives

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    app.state.breed_catalog = load_breed_catalog()
    app.state.breed_narrator = generate_breed_narratives
    yield


app = FastAPI(lifespan=lifespan)

app.include_router(websocket_router, tags=["websocket"])
app.include_router(breeds_router)
app.include_router(breed_recommendation_router)


@app.get("/")
async def root():
    return {"message": "Welcome to the Pashu Seva breed advisor!"}
