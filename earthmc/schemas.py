"""Response shapes returned by the EarthMC v3 API.

Every timestamp is Unix epoch milliseconds, or ``None`` where noted. Fields
typed ``NamedObject`` hold ``None`` for both name and UUID when the referenced
entity does not exist (a town with no nation, an unowned quarter).
"""
from __future__ import annotations

from typing import Dict, List, Literal, Optional, TypedDict

UUIDStr = str

# [x, z] pairs as sent by the API.
XZCoordinate = List[float]
# [x, y, z] block positions.
XYZCoordinate = List[int]

QuarterType = Literal["APARTMENT", "COMMONS", "PUBLIC", "SHOP", "STATION", "WORKSITE"]

MoonPhase = Literal[
    "FIRST_QUARTER",
    "FULL_MOON",
    "LAST_QUARTER",
    "NEW_MOON",
    "WANING_CRESCENT",
    "WANING_GIBBOUS",
    "WAXING_CRESCENT",
    "WAXING_GIBBOUS",
]


class NamedObject(TypedDict):
    name: Optional[str]
    uuid: Optional[UUIDStr]


class Coordinate(TypedDict):
    world: str
    x: float
    y: float
    z: float
    pitch: float
    yaw: float


class PermFlags(TypedDict):
    pvp: bool
    explosion: bool
    fire: bool
    mobs: bool


class Perms(TypedDict):
    # Resident, nation, ally, outsider
    build: List[bool]
    destroy: List[bool]
    switch: List[bool]
    itemUse: List[bool]
    flags: PermFlags


class DiscordResponse(TypedDict):
    uuid: UUIDStr
    id: str


class LocationPoint(TypedDict):
    x: float
    y: float


class LocationResponse(TypedDict):
    location: LocationPoint
    isWilderness: bool
    town: NamedObject
    nation: NamedObject


class NationTimestamps(TypedDict):
    registered: int


class NationStatus(TypedDict):
    isPublic: bool
    isOpen: bool
    isNeutral: bool


class NationStats(TypedDict):
    numTownBlocks: int
    numResidents: int
    numTowns: int
    numAllies: int
    numEnemies: int
    balance: float


class NationCoordinates(TypedDict):
    spawn: Coordinate


class NationResponse(NamedObject):
    board: Optional[str]
    dynmapColour: str
    dynmapOutline: str
    wiki: Optional[str]
    king: NamedObject
    capital: NamedObject
    timestamps: NationTimestamps
    status: NationStatus
    stats: NationStats
    coordinates: NationCoordinates
    residents: List[NamedObject]
    towns: List[NamedObject]
    allies: List[NamedObject]
    enemies: List[NamedObject]
    sanctioned: List[NamedObject]
    ranks: Dict[str, List[str]]


class TownTimestamps(TypedDict):
    registered: int
    joinedNationAt: Optional[int]
    ruinedAt: Optional[int]


class TownStatus(TypedDict):
    isPublic: bool
    isOpen: bool
    isNeutral: bool
    isCapital: bool
    isOverClaimed: bool
    isRuined: bool
    isForSale: bool
    hasNation: bool
    hasOverclaimShield: bool


class TownStats(TypedDict):
    numTownBlocks: int
    maxTownBlocks: int
    numResidents: int
    numTrusted: int
    numOutlaws: int
    balance: float
    forSalePrice: Optional[float]


class TownCoordinates(TypedDict):
    spawn: Coordinate
    homeBlock: XZCoordinate
    # Town block indices; multiply by 16 for world coordinates.
    townBlocks: List[XZCoordinate]


class TownResponse(NamedObject):
    board: Optional[str]
    founder: str
    wiki: Optional[str]
    mayor: NamedObject
    nation: NamedObject
    timestamps: TownTimestamps
    status: TownStatus
    stats: TownStats
    perms: Perms
    coordinates: TownCoordinates
    residents: List[NamedObject]
    trusted: List[NamedObject]
    outlaws: List[NamedObject]
    quarters: List[UUIDStr]
    ranks: Dict[str, List[str]]


class PlayerTimestamps(TypedDict):
    registered: int
    joinedTownAt: Optional[int]
    lastOnline: Optional[int]


class PlayerStatus(TypedDict):
    isOnline: bool
    isNPC: bool
    isMayor: bool
    isKing: bool
    hasTown: bool
    hasNation: bool


class PlayerStats(TypedDict):
    balance: float
    numFriends: int


class PlayerRanks(TypedDict):
    townRanks: List[str]
    nationRanks: List[str]


class PlayerResponse(NamedObject):
    title: Optional[str]
    surname: Optional[str]
    formattedName: str
    about: Optional[str]
    town: NamedObject
    nation: NamedObject
    timestamps: PlayerTimestamps
    status: PlayerStatus
    stats: PlayerStats
    perms: Perms
    ranks: PlayerRanks
    friends: List[NamedObject]


class QuarterTimestamps(TypedDict):
    registered: int
    claimedAt: Optional[int]


class QuarterStatus(TypedDict):
    isEmbassy: bool


class QuarterStats(TypedDict):
    price: Optional[float]
    volume: int
    numCuboids: int


class QuarterCuboid(TypedDict):
    pos1: XYZCoordinate
    pos2: XYZCoordinate


class QuarterResponse(TypedDict):
    uuid: UUIDStr
    type: QuarterType
    owner: NamedObject
    town: NamedObject
    timestamps: QuarterTimestamps
    status: QuarterStatus
    stats: QuarterStats
    # RGB
    colour: List[int]
    trusted: List[NamedObject]
    cuboids: List[QuarterCuboid]


class ServerTimestamps(TypedDict):
    newDayTime: int


class ServerStatus(TypedDict):
    hasStorm: bool
    isThundering: bool


class ServerStats(TypedDict):
    time: int
    fullTime: int
    maxPlayers: int
    numOnlinePlayers: int
    numOnlineNomads: int
    numResidents: int
    numNomads: int
    numTowns: int
    numTownBlocks: int
    numNations: int
    numQuarters: int
    numCuboids: int


class VoteParty(TypedDict):
    target: int
    numRemaining: int


class ServerResponse(TypedDict):
    version: str
    moonPhase: MoonPhase
    timestamps: ServerTimestamps
    status: ServerStatus
    stats: ServerStats
    voteParty: VoteParty
