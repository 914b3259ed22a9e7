from decision.core import DecisionMode, DecisionSession
from decision.modes.matrix import MatrixMode
from decision.modes.proscons import ProsConsMode
from storage import KeyValueStore

MODES = {
    "proscons": ProsConsMode(),
    "matrix": MatrixMode(),
}


def get_mode(mode_id: str) -> DecisionMode:
    return MODES.get(mode_id, MODES["proscons"])


def list_modes() -> dict:
    return {mode_id: mode.name for mode_id, mode in MODES.items()}


def open_session(mode_id: str, store: KeyValueStore) -> DecisionSession:
    session = DecisionSession(get_mode(mode_id), store)
    session.load()
    return session
