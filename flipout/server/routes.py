"""
HTTP API Routes for Flipout.

These routes expose the table operations: deal a hand, reveal streets,
show down and describe hands. Paced dealing and reveals for animated
clients are handled via WebSocket.
"""

from typing import Dict, Any
import logging

from fastapi import APIRouter, HTTPException, Request

from flipout.server.manager import TableManager, TableRoom
from flipout.server.schemas import (
    CreateTableRequest, StartHandRequest, AdvanceRequest, RevealRequest,
    CreateTableResponse, TableStateSchema, AdvanceResultSchema,
    ShowdownResultSchema, RevealResultSchema, DescriptionSchema,
)

router = APIRouter()

logger = logging.getLogger(__name__)


def get_manager(request: Request) -> TableManager:
    """Get the table manager of the running app."""
    return request.app.state.table_manager


def get_room(request: Request, table_id: str) -> TableRoom:
    """Get a table room or fail with 404."""
    room = get_manager(request).get_room(table_id)
    if room is None:
        raise HTTPException(status_code=404, detail=f"Table {table_id} not found")
    return room


@router.get("/health")
async def health(request: Request) -> Dict[str, Any]:
    """Liveness check."""
    return {"status": "ok", "tables": len(get_manager(request))}


@router.post("/tables", response_model=CreateTableResponse)
async def create_table(req: CreateTableRequest, request: Request) -> Dict[str, Any]:
    """Create a new, empty table."""
    room = get_manager(request).create_table(max_players=req.max_players)
    return {"table_id": room.table_id, "max_players": room.table.max_players}


@router.get("/tables/{table_id}", response_model=TableStateSchema)
async def get_table_state(table_id: str, request: Request) -> Dict[str, Any]:
    """Get the current table state, hole cards included."""
    room = get_room(request, table_id)
    return room.table.get_state()


@router.delete("/tables/{table_id}")
async def delete_table(table_id: str, request: Request) -> Dict[str, Any]:
    """Drop a table and disconnect its WebSocket clients."""
    room = get_manager(request).remove_table(table_id)
    if room is None:
        raise HTTPException(status_code=404, detail=f"Table {table_id} not found")
    await room.close_connections()
    return {"success": True, "message": f"Table {table_id} removed"}


@router.post("/tables/{table_id}/hands", response_model=TableStateSchema)
async def start_hand(table_id: str, req: StartHandRequest, request: Request) -> Dict[str, Any]:
    """
    Deal a new hand.

    Without player_count the previous hand's count is reused.
    """
    room = get_room(request, table_id)
    async with room.lock:
        try:
            room.table.next_hand(req.player_count)
        except ValueError as e:
            logger.warning(f"Cannot start hand on {table_id}: {e}")
            raise HTTPException(status_code=400, detail=str(e))
        state = room.table.get_state()
    await room.send_state_to_all()
    return state


@router.post("/tables/{table_id}/advance", response_model=AdvanceResultSchema)
async def advance(table_id: str, req: AdvanceRequest, request: Request) -> Dict[str, Any]:
    """
    Reveal the next street.

    A street requested out of order is not an error: the response reports
    success=false and the table is unchanged.
    """
    room = get_room(request, table_id)
    async with room.lock:
        try:
            result = room.table.advance(req.stage)
        except ValueError as e:
            logger.warning(f"Bad advance on {table_id}: {e}")
            raise HTTPException(status_code=400, detail=str(e))
        response = result.to_dict()
        response["board"] = [c.to_dict() for c in room.table.community_cards]
    if result.success:
        await room.send_state_to_all()
    return response


@router.post("/tables/{table_id}/reveal", response_model=RevealResultSchema)
async def reveal(table_id: str, req: RevealRequest, request: Request) -> Dict[str, Any]:
    """Reveal every remaining street at once, optionally showing down."""
    room = get_room(request, table_id)
    async with room.lock:
        result = room.table.reveal_remaining(auto_showdown=req.auto_showdown)
        response = result.to_dict()
        response["board"] = [c.to_dict() for c in room.table.community_cards]
    await room.send_state_to_all()
    return response


@router.post("/tables/{table_id}/showdown", response_model=ShowdownResultSchema)
async def showdown(table_id: str, request: Request) -> Dict[str, Any]:
    """
    Show down.

    Before the river this returns not_ready=true instead of failing.
    """
    room = get_room(request, table_id)
    async with room.lock:
        result = room.table.showdown()
    if not result.not_ready:
        await room.send_state_to_all()
    return result.to_dict()


@router.get("/tables/{table_id}/seats/{seat}/description", response_model=DescriptionSchema)
async def describe_seat(table_id: str, seat: int, request: Request) -> Dict[str, Any]:
    """Describe the best hand a seat makes with the current board."""
    room = get_room(request, table_id)
    async with room.lock:
        try:
            label = room.table.describe_winning_hand(seat)
        except IndexError as e:
            raise HTTPException(status_code=404, detail=str(e))
        name = room.table.seats[seat].name
    return {"seat": seat, "name": name, "label": label}
