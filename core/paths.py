# core/paths.py

"""
Route identifiers owned by the dashboard's route table. The access core
hands these back verbatim and never builds or parses them.
"""


class _OwnerPaths:
    ADD_CHARGE_STATION = "/add-station/charge"
    ADD_SWAP_STATION = "/add-station/swap"


class PATHS:
    OWNER = _OwnerPaths
