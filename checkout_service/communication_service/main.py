# communication_service/main.py
from fastapi import FastAPI
from pydantic import BaseModel

app = FastAPI(title="Communication Service (dev mock)")


class EventIn(BaseModel):
    event: str
    order_id: int


EVENTS: list[dict] = []


@app.post("/events", status_code=202)
def receive_event(payload: EventIn):
    EVENTS.append(payload.model_dump())
    return {"accepted": True, "event": payload.event, "order_id": payload.order_id}


@app.get("/events")
def list_events():
    return EVENTS
