"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional, Dict
from pydantic import BaseModel, Field

from flipout.core.rules import MAX_PLAYERS, DECK_SEAT_LIMIT


# ============= Request Schemas =============

class CreateTableRequest(BaseModel):
    """Request to create a new table."""
    max_players: int = Field(ge=1, le=DECK_SEAT_LIMIT, default=MAX_PLAYERS)


class StartHandRequest(BaseModel):
    """Request to deal a new hand. Omit player_count to reuse the last one."""
    player_count: Optional[int] = Field(default=None, ge=1, le=DECK_SEAT_LIMIT)


class AdvanceRequest(BaseModel):
    """Request to reveal a street."""
    stage: str = Field(..., description="Street to reveal: flop, turn or river")


class RevealRequest(BaseModel):
    """Request to reveal every remaining street."""
    auto_showdown: bool = False


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    symbol: str
    text: str
    color: str


class SeatSchema(BaseModel):
    """Seat information."""
    index: int
    name: str
    cards: List[CardSchema] = []
    result: str


class HandRankingSchema(BaseModel):
    """An evaluated hand."""
    category: int
    name: str
    key: List[int]
    cards: List[str]


class ShowdownResultSchema(BaseModel):
    """Showdown outcome."""
    not_ready: bool
    message: str
    winners: List[int] = []
    is_chop: bool = False
    labels: Dict[str, str] = {}
    rankings: Dict[str, HandRankingSchema] = {}


class TableStateSchema(BaseModel):
    """Complete table state, with the hand's showdown once it happened."""
    table_id: Optional[str] = None
    hand_number: int
    stage: str
    board: List[CardSchema]
    seats: List[SeatSchema]
    deck_remaining: int
    status: str
    showdown: Optional[ShowdownResultSchema] = None


class CreateTableResponse(BaseModel):
    """Identifier of a newly created table."""
    table_id: str
    max_players: int


class AdvanceResultSchema(BaseModel):
    """Result of a street reveal."""
    success: bool
    stage: str
    message: str
    cards: List[CardSchema] = []
    board: List[CardSchema] = []


class RevealResultSchema(BaseModel):
    """Streets revealed in one go, plus the optional showdown."""
    streets: List[AdvanceResultSchema]
    showdown: Optional[ShowdownResultSchema] = None
    board: List[CardSchema] = []


class DescriptionSchema(BaseModel):
    """Description of a seat's best hand."""
    seat: int
    name: str
    label: str


# ============= WebSocket Message Schemas =============

class WSMessage(BaseModel):
    """Base WebSocket message."""
    type: str


class WSStartHandMessage(BaseModel):
    """Deal a new hand, optionally one card at a time."""
    type: str = "start_hand"
    player_count: Optional[int] = Field(default=None, ge=1, le=DECK_SEAT_LIMIT)
    animate: bool = False
    deal_delay_ms: Optional[int] = Field(default=None, ge=0)


class WSAdvanceMessage(BaseModel):
    """Reveal a street."""
    type: str = "advance"
    stage: str


class WSAutoRevealMessage(BaseModel):
    """Reveal the remaining streets with pauses in between."""
    type: str = "auto_reveal"
    auto_showdown: bool = False
    flop_delay_ms: Optional[int] = Field(default=None, ge=0)
    turn_delay_ms: Optional[int] = Field(default=None, ge=0)
    river_delay_ms: Optional[int] = Field(default=None, ge=0)
    showdown_delay_ms: Optional[int] = Field(default=None, ge=0)


class WSDescribeMessage(BaseModel):
    """Describe a seat's best hand."""
    type: str = "describe"
    seat: int


class WSErrorMessage(BaseModel):
    """WebSocket error message."""
    type: str = "error"
    message: str
