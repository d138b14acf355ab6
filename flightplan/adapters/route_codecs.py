"""Route import/export for Garmin FPL, Garmin GFP and GPX 1.1.

Imported routes carry waypoints only; legs and totals are computed by the
route engine when the route is saved.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from pydantic import ValidationError

from flightplan.contracts.common import LatLng, utc_now
from flightplan.contracts.enums import RouteFormat, WaypointType
from flightplan.contracts.route import Route
from flightplan.contracts.waypoint import Waypoint, new_id
from flightplan.errors import PlanValidationError
from flightplan.services.units import feet_to_meters, meters_to_feet

FPL_NS = "http://www8.garmin.com/xmlschemas/FlightPlan/v1"
GPX_NS = "http://www.topografix.com/GPX/1/1"

# Garmin waypoint-type ↔ WaypointType
_FPL_TYPES = {
    WaypointType.AIRPORT.value: "AIRPORT",
    WaypointType.VOR.value: "VOR",
    WaypointType.NDB.value: "NDB",
    WaypointType.FIX.value: "INT",
    WaypointType.GPS.value: "USER WAYPOINT",
    WaypointType.CUSTOM.value: "USER WAYPOINT",
}
_FPL_TYPES_REVERSE = {
    "AIRPORT": WaypointType.AIRPORT,
    "VOR": WaypointType.VOR,
    "NDB": WaypointType.NDB,
    "INT": WaypointType.FIX,
    "INT-VRP": WaypointType.FIX,
    "USER WAYPOINT": WaypointType.CUSTOM,
}


def _type_value(wp: Waypoint) -> str:
    # Defaults skip validation, so the field may still hold the enum member
    return WaypointType(wp.type).value


def import_route(raw: str, fmt: RouteFormat | str, name: str | None = None) -> Route:
    """Parse *raw* in format *fmt* into an unsaved route (no legs)."""
    fmt = _format(fmt)
    if not raw or not raw.strip():
        raise PlanValidationError(f"Empty {fmt.value} document", field="raw")
    try:
        parsed_name, waypoints = _IMPORTERS[fmt](raw)
    except ValidationError as exc:
        raise PlanValidationError(f"Invalid waypoint in {fmt.value} document: {exc}", field="raw") from exc
    if not waypoints:
        raise PlanValidationError(f"No waypoints in {fmt.value} document", field="raw")
    route_name = name or parsed_name or f"Imported Route ({fmt.value.upper()})"
    return Route(name=route_name, waypoints=waypoints)


def export_route(route: Route, fmt: RouteFormat | str) -> str:
    fmt = _format(fmt)
    return _EXPORTERS[fmt](route)


def _format(fmt: RouteFormat | str) -> RouteFormat:
    try:
        return RouteFormat(fmt)
    except ValueError as exc:
        raise PlanValidationError(f"Unsupported route format {fmt!r}", field="format") from exc


def _parse_xml(raw: str, kind: str) -> ET.Element:
    try:
        return ET.fromstring(raw)
    except ET.ParseError as exc:
        raise PlanValidationError(f"Malformed {kind} XML: {exc}", field="raw") from exc


def _text(parent: ET.Element, tag: str) -> str | None:
    el = parent.find(tag)
    if el is None or el.text is None:
        return None
    return el.text.strip() or None


def _float(value: str | None, what: str) -> float:
    if value is None:
        raise PlanValidationError(f"Missing {what}", field="raw")
    try:
        return float(value)
    except ValueError as exc:
        raise PlanValidationError(f"Invalid {what}: {value!r}", field="raw") from exc


# ---------------------------------------------------------------------------
# Garmin FlightPlan v1 (.fpl)
# ---------------------------------------------------------------------------


def _import_fpl(raw: str) -> tuple[str | None, list[Waypoint]]:
    root = _parse_xml(raw, "FPL")
    ns = f"{{{FPL_NS}}}"
    table = root.find(f"{ns}waypoint-table")
    route_el = root.find(f"{ns}route")
    if table is None or route_el is None:
        raise PlanValidationError("FPL document lacks waypoint-table or route", field="raw")

    known: dict[str, Waypoint] = {}
    for wp_el in table.findall(f"{ns}waypoint"):
        identifier = _text(wp_el, f"{ns}identifier")
        if identifier is None:
            raise PlanValidationError("FPL waypoint without identifier", field="raw")
        garmin_type = (_text(wp_el, f"{ns}type") or "USER WAYPOINT").upper()
        known[identifier.upper()] = Waypoint(
            identifier=identifier,
            type=_FPL_TYPES_REVERSE.get(garmin_type, WaypointType.CUSTOM),
            name=_text(wp_el, f"{ns}comment"),
            coordinates=LatLng(
                lat=_float(_text(wp_el, f"{ns}lat"), f"latitude of {identifier}"),
                lng=_float(_text(wp_el, f"{ns}lon"), f"longitude of {identifier}"),
            ),
        )

    waypoints = []
    for point in route_el.findall(f"{ns}route-point"):
        identifier = _text(point, f"{ns}waypoint-identifier")
        if identifier is None or identifier.upper() not in known:
            raise PlanValidationError(
                f"Route point {identifier!r} is not in the waypoint table", field="raw"
            )
        # Each route point gets its own waypoint instance
        waypoints.append(known[identifier.upper()].model_copy(update={"id": new_id()}))

    return _text(route_el, f"{ns}route-name"), waypoints


def _export_fpl(route: Route) -> str:
    ET.register_namespace("", FPL_NS)
    ns = f"{{{FPL_NS}}}"
    root = ET.Element(f"{ns}flight-plan")
    ET.SubElement(root, f"{ns}created").text = utc_now().strftime("%Y-%m-%dT%H:%M:%SZ")

    table = ET.SubElement(root, f"{ns}waypoint-table")
    seen: set[str] = set()
    for wp in route.waypoints:
        if wp.identifier in seen:
            continue
        seen.add(wp.identifier)
        wp_el = ET.SubElement(table, f"{ns}waypoint")
        ET.SubElement(wp_el, f"{ns}identifier").text = wp.identifier
        ET.SubElement(wp_el, f"{ns}type").text = _FPL_TYPES[_type_value(wp)]
        ET.SubElement(wp_el, f"{ns}country-code")
        ET.SubElement(wp_el, f"{ns}lat").text = f"{wp.coordinates.lat:.6f}"
        ET.SubElement(wp_el, f"{ns}lon").text = f"{wp.coordinates.lng:.6f}"
        ET.SubElement(wp_el, f"{ns}comment").text = wp.name or ""

    route_el = ET.SubElement(root, f"{ns}route")
    ET.SubElement(route_el, f"{ns}route-name").text = route.name
    ET.SubElement(route_el, f"{ns}flight-plan-index").text = "1"
    for wp in route.waypoints:
        point = ET.SubElement(route_el, f"{ns}route-point")
        ET.SubElement(point, f"{ns}waypoint-identifier").text = wp.identifier
        ET.SubElement(point, f"{ns}waypoint-type").text = _FPL_TYPES[_type_value(wp)]
        ET.SubElement(point, f"{ns}waypoint-country-code")

    ET.indent(root)
    return ET.tostring(root, encoding="unicode", xml_declaration=True)


# ---------------------------------------------------------------------------
# Garmin GFP text (.gfp)
#
#   FPN/RI:DA:KORD:F:PAYGE:AA:KMDW
#   WPT/PAYGE:41.880000:-87.830000:fix
#
# The FPN/RI line carries identifiers only (DA departure, F en-route fix,
# AA arrival). Coordinates and types follow in one WPT/ line per waypoint.
# ---------------------------------------------------------------------------


def _import_gfp(raw: str) -> tuple[str | None, list[Waypoint]]:
    lines = [line.strip() for line in raw.strip().splitlines() if line.strip()]
    if not lines or not lines[0].upper().startswith("FPN/RI:"):
        raise PlanValidationError("GFP document must start with FPN/RI:", field="raw")

    tokens = lines[0][len("FPN/RI:"):].split(":")
    if len(tokens) % 2:
        raise PlanValidationError("GFP route line has an unpaired token", field="raw")
    identifiers = []
    for role, identifier in zip(tokens[0::2], tokens[1::2]):
        if role.upper() not in ("DA", "F", "AA") or not identifier:
            raise PlanValidationError(f"Bad GFP route element {role}:{identifier}", field="raw")
        identifiers.append(identifier.upper())

    name = None
    positions: dict[str, tuple[float, float, WaypointType]] = {}
    for line in lines[1:]:
        if line.upper().startswith("NAME/"):
            name = line[len("NAME/"):].strip() or None
            continue
        if not line.upper().startswith("WPT/"):
            raise PlanValidationError(f"Unexpected GFP line {line!r}", field="raw")
        parts = line[len("WPT/"):].split(":")
        if len(parts) < 3:
            raise PlanValidationError(f"Bad GFP waypoint line {line!r}", field="raw")
        try:
            wp_type = WaypointType(parts[3].lower()) if len(parts) > 3 else WaypointType.CUSTOM
        except ValueError as exc:
            raise PlanValidationError(f"Unknown waypoint type in {line!r}", field="raw") from exc
        positions[parts[0].strip().upper()] = (
            _float(parts[1], f"latitude of {parts[0]}"),
            _float(parts[2], f"longitude of {parts[0]}"),
            wp_type,
        )

    waypoints = []
    for identifier in identifiers:
        if identifier not in positions:
            raise PlanValidationError(f"No coordinates for {identifier}", field="raw")
        lat, lng, wp_type = positions[identifier]
        waypoints.append(
            Waypoint(identifier=identifier, type=wp_type, coordinates=LatLng(lat=lat, lng=lng))
        )
    return name, waypoints


def _export_gfp(route: Route) -> str:
    elements = []
    last = len(route.waypoints) - 1
    for i, wp in enumerate(route.waypoints):
        if ":" in wp.identifier or any(c.isspace() for c in wp.identifier):
            raise PlanValidationError(
                f"Identifier {wp.identifier!r} cannot be written to GFP", field="waypoints"
            )
        if i == 0 and wp.type == WaypointType.AIRPORT:
            role = "DA"
        elif i == last and i > 0 and wp.type == WaypointType.AIRPORT:
            role = "AA"
        else:
            role = "F"
        elements.append(f"{role}:{wp.identifier}")

    # NAME/ is a single line
    lines = ["FPN/RI:" + ":".join(elements), "NAME/" + " ".join(route.name.split())]
    seen: set[str] = set()
    for wp in route.waypoints:
        if wp.identifier in seen:
            continue
        seen.add(wp.identifier)
        lines.append(
            f"WPT/{wp.identifier}:{wp.coordinates.lat:.6f}:{wp.coordinates.lng:.6f}:{_type_value(wp)}"
        )
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# GPX 1.1 (.gpx), one <rte>
# ---------------------------------------------------------------------------


def _gpx_type(value: str | None) -> WaypointType:
    if value is None:
        return WaypointType.CUSTOM
    try:
        return WaypointType(value.lower())
    except ValueError:
        return WaypointType.CUSTOM


def _import_gpx(raw: str) -> tuple[str | None, list[Waypoint]]:
    root = _parse_xml(raw, "GPX")
    ns = f"{{{GPX_NS}}}"
    rte = root.find(f"{ns}rte")
    if rte is None:
        raise PlanValidationError("GPX document has no <rte>", field="raw")

    waypoints = []
    for i, pt in enumerate(rte.findall(f"{ns}rtept")):
        identifier = _text(pt, f"{ns}name") or f"WP{i + 1}"
        wp_type = _gpx_type(_text(pt, f"{ns}type"))
        elevation = _text(pt, f"{ns}ele")
        waypoints.append(Waypoint(
            identifier=identifier,
            type=wp_type,
            name=_text(pt, f"{ns}desc"),
            coordinates=LatLng(
                lat=_float(pt.get("lat"), f"latitude of {identifier}"),
                lng=_float(pt.get("lon"), f"longitude of {identifier}"),
            ),
            altitude_ft=meters_to_feet(_float(elevation, "elevation")) if elevation else None,
        ))
    return _text(rte, f"{ns}name"), waypoints


def _export_gpx(route: Route) -> str:
    ET.register_namespace("", GPX_NS)
    ns = f"{{{GPX_NS}}}"
    root = ET.Element(f"{ns}gpx", {"version": "1.1", "creator": "flightplan-engine"})
    rte = ET.SubElement(root, f"{ns}rte")
    ET.SubElement(rte, f"{ns}name").text = route.name
    for wp in route.waypoints:
        pt = ET.SubElement(
            rte, f"{ns}rtept",
            {"lat": f"{wp.coordinates.lat:.6f}", "lon": f"{wp.coordinates.lng:.6f}"},
        )
        if wp.altitude_ft is not None:
            ET.SubElement(pt, f"{ns}ele").text = f"{feet_to_meters(wp.altitude_ft):.1f}"
        ET.SubElement(pt, f"{ns}name").text = wp.identifier
        if wp.name:
            ET.SubElement(pt, f"{ns}desc").text = wp.name
        ET.SubElement(pt, f"{ns}type").text = _type_value(wp)

    ET.indent(root)
    return ET.tostring(root, encoding="unicode", xml_declaration=True)


_IMPORTERS = {
    RouteFormat.FPL: _import_fpl,
    RouteFormat.GFP: _import_gfp,
    RouteFormat.GPX: _import_gpx,
}
_EXPORTERS = {
    RouteFormat.FPL: _export_fpl,
    RouteFormat.GPX: _export_gpx,
    RouteFormat.GFP: _export_gfp,
}
