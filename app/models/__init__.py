from .trips.trip_model import Trip
from .trips.participant import Participant
from .trips.link import Link
from .itinerary.activity import Activity
