"""
Application Layer

Contains the player session proxy and the ports it depends on.

Structure:
- services/: The per-guild player that mediates between callers and a node
- interfaces/: Port interfaces for the node transport and the session registry
"""
