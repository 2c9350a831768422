"""
Game catalog: the store of game definitions the engine reads from

The engine only ever reads a game and replaces it as a whole record
(to set `active` and extend `history`). Any persistent backend can take
the place of InMemoryGameCatalog as long as it offers the same two
operations.
"""
from pathlib import Path
from threading import Lock
from typing import Dict, Iterable, List, Optional

import yaml

from quiz_engine.models import Game


class InMemoryGameCatalog:
    """Dictionary-backed catalog handing out copies of its records"""

    def __init__(self, games: Optional[Iterable[Game]] = None) -> None:
        self._lock = Lock()
        self._games: Dict[str, Game] = {}
        for game in games or []:
            self._games[game.id] = game.model_copy(deep=True)

    def get_game(self, game_id: str) -> Optional[Game]:
        with self._lock:
            game = self._games.get(game_id)
            return game.model_copy(deep=True) if game else None

    def replace_game(self, game: Game) -> None:
        """Atomically replace the whole record"""
        with self._lock:
            self._games[game.id] = game.model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._games)


def load_games(path: str) -> List[Game]:
    """
    Load game definitions from a YAML file

    File format:
        games:
          - id: 1
            name: Capitals
            owner: host@example.com
            questions:
              - id: q1
                text: Capital of France?
                type: single
                duration: 20
                points: 100
                options:
                  - {id: a, text: Paris, correct: true}
                  - {id: b, text: Lyon}

    Args:
        path: Path to YAML file

    Returns:
        List of validated Game records

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a game id appears twice
        pydantic.ValidationError: If a question breaks its type invariants
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"Games file not found: {path}")

    with open(file_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    games = []
    seen = set()
    for raw in data.get("games", []):
        game = Game(**raw)
        if game.id in seen:
            raise ValueError(f"Duplicate game id: {game.id}")
        seen.add(game.id)
        games.append(game)

    return games
