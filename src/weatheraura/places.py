"""Curated catalogue for the "random place" button."""

import random

from weatheraura.models import Location

# Geocoders cannot resolve open ocean or the poles, so these carry fixed coordinates.
SPECIAL_PLACES: dict[str, tuple[float, float]] = {
    "Pacific Ocean": (-10.0, -140.0),
    "Atlantic Ocean": (30.0, -30.0),
    "Indian Ocean": (-20.0, 80.0),
    "Arctic Ocean": (80.0, 0.0),
    "Southern Ocean": (-60.0, 0.0),
    "Antarctica": (-75.0, 0.0),
    "South Pole": (-90.0, 0.0),
    "North Pole": (90.0, 0.0),
    "Point Nemo, Pacific Ocean": (-48.8767, -123.3933),
    "Mid-Atlantic Ridge": (0.0, -25.0),
    "Mariana Trench": (11.35, 142.2),
}

PLACES: tuple[str, ...] = (
    # North America
    "New York, USA",
    "Los Angeles, USA",
    "Chicago, USA",
    "St. Louis, MO",
    "Denver, Colorado",
    "Miami, USA",
    "Anchorage, USA",
    "Honolulu, USA",
    "Vancouver, Canada",
    "Montreal, Canada",
    "Mexico City, Mexico",
    # South America
    "São Paulo, Brazil",
    "Buenos Aires, Argentina",
    "Lima, Peru",
    "Bogotá, Colombia",
    "Ushuaia, Argentina",
    # Europe
    "London, UK",
    "Paris, France",
    "Berlin, Germany",
    "Reykjavik, Iceland",
    "Tromsø, Norway",
    "Rome, Italy",
    "Istanbul, Turkey",
    "Moscow, Russia",
    # Asia
    "Tokyo, Japan",
    "Seoul, South Korea",
    "Busan, South Korea",
    "Beijing, China",
    "Mumbai, India",
    "Bangkok, Thailand",
    "Singapore",
    "Jakarta, Indonesia",
    "Dubai, UAE",
    "Ulaanbaatar, Mongolia",
    # Africa
    "Cairo, Egypt",
    "Lagos, Nigeria",
    "Nairobi, Kenya",
    "Cape Town, South Africa",
    "Marrakech, Morocco",
    # Oceania
    "Sydney, Australia",
    "Perth, Australia",
    "Auckland, New Zealand",
    "Suva, Fiji",
    # Landmarks and extremes
    "Mount Everest Base Camp",
    "Death Valley, USA",
    "Atacama Desert, Chile",
    "Sahara Desert",
    "Amazon Rainforest",
    "Salar de Uyuni, Bolivia",
    "Dallol, Ethiopia",
    "Oymyakon, Russia",
    "Svalbard, Norway",
    "Alert, Nunavut, Canada",
    "Lake Baikal, Russia",
    "Dead Sea",
    "Easter Island",
    "Galapagos Islands",
    *SPECIAL_PLACES,
)


def special_location(name: str) -> Location | None:
    """Fixed-coordinate Location for a special place, or None."""
    coords = SPECIAL_PLACES.get(name)
    if coords is None:
        return None
    lat, lon = coords
    return Location(name=name, latitude=lat, longitude=lon)


def random_place(rng: random.Random) -> str:
    return rng.choice(PLACES)
