"""Static lookup table for camera location codes."""

from __future__ import annotations

from typing import Dict

from forest_green.errors import ConfigurationError

LOCATIONS: Dict[str, str] = {
    "MC100": "Tammela, canopy",
    "MC101": "Tammela, ground",
    "MC102": "Tammela, crown",
    "MC103": "Punkaharju, ground",
    "MC104": "Punkaharju, crown",
    "MC105": "Punkaharju, landscape",
    "MC106": "Hyytiälä, crown",
    "MC107": "Hyytiälä, ground",
    "MC108": "Sodankylä, forest, canopy",
    "MC109": "Sodankylä, forest, crown",
    "MC110": "Sodankylä, forest, ground",
    "MC111": "Sodankylä, wetland, ground",
    "MC112": "Parkano, landscape",
    "MC113": "Suonenjoki, canopy",
    "MC114": "Kenttärova, canopy",
    "MC115": "Kenttärova, crown",
    "MC116": "Kenttärova, ground",
    "MC117": "Paljakka, landscape",
    "MC117-1": "Paljakka, landscape",
    "MC118": "Paljakka, landscape",
    "MC119": "Värriö, canopy",
    "MC120": "Värriö, crown",
    "MC121": "Värriö, ground",
    "MC122": "Lammi, crown",
    "MC123": "Lammi, crown",
    "MC124": "Lammi, landscape",
    "MC125": "Lammi, landscape",
    "MC126": "Lammi, ground",
    "MC127": "Lammi, ground",
    "MC128": "Kaamanen, ground",
    "MC129": "Lompolojänkkä, ground",
    "MC130": "Tvärminne, landscape",
    "MC131": "Jokioinen, landscape",
}


def resolve_location(code: str) -> str:
    """Return the human-readable location for a camera code."""
    try:
        return LOCATIONS[code.strip()]
    except KeyError:
        raise ConfigurationError(
            f"Given location info is unknown: {code!r}"
        ) from None


__all__ = ["LOCATIONS", "resolve_location"]
