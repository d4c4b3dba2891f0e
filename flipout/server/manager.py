"""
Table registry shared by the HTTP routes and the WebSocket endpoint.

Each table lives in a TableRoom together with its WebSocket connections
and a lock. Every call into a Table goes through ``room.lock`` so paced
reveals and concurrent requests never interleave on one table.
"""

from __future__ import annotations
from typing import Dict, Optional, Any
from dataclasses import dataclass, field
import asyncio
import logging

from fastapi import WebSocket

from flipout.core.table import Table
from flipout.core.rules import MAX_PLAYERS


logger = logging.getLogger(__name__)


@dataclass
class TableRoom:
    """
    A table with its connected clients.

    A transient room was opened by a WebSocket client rather than created
    over HTTP, and is dropped once its last client leaves.
    """
    table_id: str
    table: Table
    connections: Dict[str, WebSocket] = field(default_factory=dict)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    transient: bool = False

    async def broadcast(self, message: Dict[str, Any]) -> None:
        """Send a message to every connected client."""
        for connection_id, ws in list(self.connections.items()):
            try:
                await ws.send_json(message)
            except Exception as e:
                logger.error(f"Error sending to {connection_id}: {e}")
                self.connections.pop(connection_id, None)

    async def send_state_to_all(self) -> None:
        """Send the current table state to every connected client."""
        await self.broadcast({"type": "state", **self.table.get_state()})

    async def close_connections(self) -> None:
        """Tell every client the table is gone, then close their sockets."""
        await self.broadcast({"type": "table_closed", "table_id": self.table_id})
        for connection_id, ws in list(self.connections.items()):
            self.connections.pop(connection_id, None)
            try:
                await ws.close(code=1001)
            except Exception as e:
                logger.error(f"Error closing {connection_id}: {e}")


class TableManager:
    """
    Manages table rooms.

    Usage:
        manager = TableManager()
        room = manager.create_table()
        room = manager.get_room(room.table_id)
        room = manager.remove_table(room.table_id)
        await room.close_connections()
    """

    def __init__(self):
        self.rooms: Dict[str, TableRoom] = {}
        self._table_counter = 0

    def create_table(
        self,
        max_players: int = MAX_PLAYERS,
        table_id: Optional[str] = None,
        transient: bool = False,
    ) -> TableRoom:
        """
        Create a new table room.

        Raises:
            ValueError: If max_players is out of range or table_id is taken
        """
        if table_id is None:
            self._table_counter += 1
            table_id = f"table-{self._table_counter}"
            while table_id in self.rooms:
                self._table_counter += 1
                table_id = f"table-{self._table_counter}"
        elif table_id in self.rooms:
            raise ValueError(f"Table {table_id} already exists")

        table = Table(table_id=table_id, max_players=max_players)
        room = TableRoom(table_id=table_id, table=table, transient=transient)
        self.rooms[table_id] = room
        logger.info(f"Created {table_id} (max {max_players} players)")

        return room

    def get_room(self, table_id: str) -> Optional[TableRoom]:
        """Get a table room by ID."""
        return self.rooms.get(table_id)

    def get_or_create(self, table_id: str) -> TableRoom:
        """Get a table room, opening a transient one under that ID when missing."""
        room = self.get_room(table_id)
        if room is None:
            room = self.create_table(table_id=table_id, transient=True)
        return room

    def leave(self, room: TableRoom, connection_id: str) -> None:
        """
        Drop a connection from its room.

        A transient room is removed with its last connection, unless it was
        already removed or replaced under the same ID.
        """
        room.connections.pop(connection_id, None)
        if room.transient and not room.connections and self.rooms.get(room.table_id) is room:
            self.remove_table(room.table_id)

    def remove_table(self, table_id: str) -> Optional[TableRoom]:
        """
        Remove a table.

        Returns:
            The removed room, whose clients the caller should close, or
            None if it did not exist
        """
        room = self.rooms.pop(table_id, None)
        if room is not None:
            logger.info(f"Removed {table_id}")
        return room

    def __len__(self) -> int:
        return len(self.rooms)
