"""Game domain services: questions, scoring, the room store and the coordinator.

This package holds the room state machine. Nothing in here touches
Socket.IO; handlers return outcomes and the socket layer decides how to
deliver them.
"""

