"""Enumerations shared across all flight planning contracts."""

from enum import Enum


class WaypointType(str, Enum):
    """Intrinsic nature of a waypoint."""
    AIRPORT = "airport"
    VOR = "vor"
    NDB = "ndb"
    FIX = "fix"
    GPS = "gps"
    CUSTOM = "custom"


class AircraftCategory(str, Enum):
    SINGLE_ENGINE = "single-engine"
    MULTI_ENGINE = "multi-engine"
    TURBOPROP = "turboprop"
    JET = "jet"
    HELICOPTER = "helicopter"


class StationType(str, Enum):
    """Type of loading station."""
    PILOT = "pilot"
    PASSENGER = "passenger"
    BAGGAGE = "baggage"
    FUEL = "fuel"
    CARGO = "cargo"


class CGStatus(str, Enum):
    """Classification of a loading against the CG envelope."""
    WITHIN_LIMITS = "within-limits"
    FORWARD_LIMIT = "forward-limit"
    AFT_LIMIT = "aft-limit"
    OVER_WEIGHT = "over-weight"


class WeightUnit(str, Enum):
    LBS = "lbs"
    KG = "kg"


class ArmUnit(str, Enum):
    INCHES = "inches"
    MM = "mm"


class FuelUnit(str, Enum):
    GAL = "gal"
    LITERS = "l"
    LBS = "lbs"
    KG = "kg"


class RouteFormat(str, Enum):
    """Flight plan interchange formats handled by the route codecs."""
    FPL = "fpl"
    GFP = "gfp"
    GPX = "gpx"


class FlightConditions(str, Enum):
    VFR = "VFR"
    MVFR = "MVFR"
    IFR = "IFR"
    LIFR = "LIFR"


class CloudCover(str, Enum):
    SKC = "SKC"
    CLR = "CLR"
    FEW = "FEW"
    SCT = "SCT"
    BKN = "BKN"
    OVC = "OVC"


class NotamType(str, Enum):
    RUNWAY = "runway"
    TAXIWAY = "taxiway"
    APPROACH = "approach"
    TOWER = "tower"
    OBSTACLE = "obstacle"
    AIRSPACE = "airspace"
    LIGHTING = "lighting"
    NAVAID = "navaid"
    GENERAL = "general"


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class NotamCategory(str, Enum):
    CLOSURE = "closure"
    RESTRICTION = "restriction"
    CHANGE = "change"
    INFORMATION = "information"


class ServiceState(str, Enum):
    """Lifecycle of one service registered with the orchestrator."""
    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class OrchestratorState(str, Enum):
    NOT_STARTED = "not_started"
    INITIALIZING = "initializing"
    INITIALIZED = "initialized"
    CLEANING_UP = "cleaning_up"
