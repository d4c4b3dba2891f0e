"""
WebSocket handling for animated clients.

The table itself never waits. This layer owns the pacing: it deals hole
cards one at a time and reveals streets with pauses in between, pushing
each step to every client connected to the table. The room lock is held
for a whole paced sequence so nothing else can act on the table mid-way.
"""

from __future__ import annotations
from typing import Dict, Any, Optional
import asyncio
import itertools
import logging

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from flipout.core.rules import (
    Stage, DEAL_DELAY_MS, FLOP_DELAY_MS, TURN_DELAY_MS, RIVER_DELAY_MS, SHOWDOWN_DELAY_MS,
    STREET_TRANSITIONS,
)
from flipout.server.manager import TableManager, TableRoom
from flipout.server.schemas import (
    WSMessage, WSStartHandMessage, WSAdvanceMessage, WSAutoRevealMessage,
    WSDescribeMessage, WSErrorMessage,
)


logger = logging.getLogger(__name__)

_connection_counter = itertools.count(1)


def _error(message: str) -> Dict[str, Any]:
    return WSErrorMessage(message=message).model_dump()


async def _pause(delay_ms: Optional[int], default_ms: int) -> None:
    delay = default_ms if delay_ms is None else delay_ms
    if delay > 0:
        await asyncio.sleep(delay / 1000)


class TableSession:
    """
    Handles messages from one client connected to one table.

    Usage:
        session = TableSession(room)
        response = await session.handle_message({"type": "advance", "stage": "flop"})
    """

    def __init__(self, room: TableRoom):
        self.room = room

    @property
    def table(self):
        return self.room.table

    async def handle_message(self, message: Dict[str, Any]) -> Dict[str, Any]:
        """
        Handle a message from a client.

        Returns:
            Response dict for the sender
        """
        try:
            msg_type = WSMessage(**message).type
        except ValidationError:
            return _error("Message type required")

        handlers = {
            "start_hand": self._handle_start_hand,
            "advance": self._handle_advance,
            "auto_reveal": self._handle_auto_reveal,
            "showdown": self._handle_showdown,
            "describe": self._handle_describe,
            "get_state": self._handle_get_state,
        }
        handler = handlers.get(msg_type)
        if handler is None:
            return _error(f"Unknown message type: {msg_type}")

        try:
            return await handler(message)
        except ValidationError as e:
            return _error(f"Invalid {msg_type} message: {e.errors()[0]['msg']}")
        except (ValueError, IndexError) as e:
            logger.warning(f"{self.room.table_id}: {msg_type} rejected: {e}")
            return _error(str(e))

    async def _handle_start_hand(self, message: Dict[str, Any]) -> Dict[str, Any]:
        """Deal a new hand, optionally card by card."""
        msg = WSStartHandMessage(**message)
        async with self.room.lock:
            self.table.next_hand(msg.player_count)

            if msg.animate:
                await self.room.broadcast({
                    "type": "hand_started",
                    "hand_number": self.table.hand_number,
                    "players": self.table.num_players,
                })
                for seat_index, card in self.table.deal_sequence:
                    await self.room.broadcast({
                        "type": "card_dealt",
                        "seat": seat_index,
                        "card": card.to_dict(),
                    })
                    await _pause(msg.deal_delay_ms, DEAL_DELAY_MS)

            await self.room.send_state_to_all()

        return {
            "type": "hand_started",
            "hand_number": self.table.hand_number,
            "players": self.table.num_players,
        }

    async def _handle_advance(self, message: Dict[str, Any]) -> Dict[str, Any]:
        """Reveal one street."""
        msg = WSAdvanceMessage(**message)
        async with self.room.lock:
            result = self.table.advance(msg.stage)
            if result.success:
                await self._broadcast_street(result)
        return {"type": "advance_result", **result.to_dict()}

    async def _handle_auto_reveal(self, message: Dict[str, Any]) -> Dict[str, Any]:
        """Reveal the remaining streets with pauses, then optionally show down."""
        msg = WSAutoRevealMessage(**message)
        delays = {
            Stage.FLOP: (msg.flop_delay_ms, FLOP_DELAY_MS),
            Stage.TURN: (msg.turn_delay_ms, TURN_DELAY_MS),
            Stage.RIVER: (msg.river_delay_ms, RIVER_DELAY_MS),
        }
        revealed = []

        async with self.room.lock:
            while self.table.stage in STREET_TRANSITIONS:
                street, _ = STREET_TRANSITIONS[self.table.stage]
                await _pause(*delays[street])
                result = self.table.advance(street)
                revealed.append(result.stage.name)
                await self._broadcast_street(result)

            showdown = None
            if msg.auto_showdown:
                await _pause(msg.showdown_delay_ms, SHOWDOWN_DELAY_MS)
                showdown = self.table.showdown()
                await self._broadcast_showdown(showdown)

        return {
            "type": "auto_reveal_result",
            "revealed": revealed,
            "showdown": showdown.to_dict() if showdown else None,
        }

    async def _handle_showdown(self, message: Dict[str, Any]) -> Dict[str, Any]:
        async with self.room.lock:
            result = self.table.showdown()
            if not result.not_ready:
                await self._broadcast_showdown(result)
        return {"type": "showdown", **result.to_dict()}

    async def _handle_describe(self, message: Dict[str, Any]) -> Dict[str, Any]:
        msg = WSDescribeMessage(**message)
        async with self.room.lock:
            label = self.table.describe_winning_hand(msg.seat)
        return {"type": "description", "seat": msg.seat, "label": label}

    async def _handle_get_state(self, message: Dict[str, Any]) -> Dict[str, Any]:
        return {"type": "state", **self.table.get_state()}

    async def _broadcast_street(self, result) -> None:
        await self.room.broadcast({
            "type": "street",
            **result.to_dict(),
            "board": [c.to_dict() for c in self.table.community_cards],
        })

    async def _broadcast_showdown(self, result) -> None:
        await self.room.broadcast({"type": "showdown", **result.to_dict()})
        await self.room.send_state_to_all()


async def websocket_endpoint(websocket: WebSocket, table_id: str):
    """
    WebSocket endpoint for one table.

    Protocol:
    1. Client connects to /ws/{table_id}; a missing table is opened for the
       sockets and dropped when the last one leaves
    2. Server sends the table state
    3. Client sends messages: {"type": "start_hand", "player_count": 6, "animate": true}
    4. Server broadcasts dealt cards, streets and showdowns to every client
    """
    manager: TableManager = websocket.app.state.table_manager
    connection_id = f"conn-{next(_connection_counter)}"
    room: Optional[TableRoom] = None

    try:
        await websocket.accept()
        room = manager.get_or_create(table_id)
        room.connections[connection_id] = websocket
        logger.info(f"{connection_id} joined {table_id}")

        await websocket.send_json({"type": "state", **room.table.get_state()})

        session = TableSession(room)
        while True:
            message = await websocket.receive_json()
            if not isinstance(message, dict):
                await websocket.send_json(_error("Message must be a JSON object"))
                continue
            response = await session.handle_message(message)
            await websocket.send_json(response)

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: {connection_id}")
    except Exception as e:
        logger.error(f"WebSocket error on {table_id}: {e}")
        raise
    finally:
        if room is not None:
            manager.leave(room, connection_id)
