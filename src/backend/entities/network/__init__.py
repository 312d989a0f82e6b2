"""
Meet query network - supervisor, analyst, and summary agents in one run loop.

``MeetQueryNetwork`` runs the loop; ``NetworkClients`` /
``create_network_clients`` provide dependency injection.
"""

from .clients import ClickHouseResultStore, NetworkClients, create_network_clients
from .network import DEFAULT_MAX_TURNS, MeetQueryNetwork, Participant, build_participants

__all__ = [
    "DEFAULT_MAX_TURNS",
    "ClickHouseResultStore",
    "MeetQueryNetwork",
    "NetworkClients",
    "Participant",
    "build_participants",
    "create_network_clients",
]
