"""Static roster of the project managers whose hours are recorded.

Usernames are first names and the initial passwords are surnames in capitals;
``seed_accounts`` derives both from the full name.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional

DEFAULT_WEEKLY_TARGET = 40.0
DEFAULT_HOURLY_RATE = 50.0
ADMIN_NAME = "Ahmed Al-Dajani"


@dataclass(frozen=True)
class ProjectManager:
    name: str
    weekly_target: float = 35.0
    hourly_rate: float = DEFAULT_HOURLY_RATE

    @property
    def daily_target(self) -> float:
        return self.weekly_target / 5

    @property
    def username(self) -> str:
        return self.name.split()[0]

    @property
    def initial_password(self) -> str:
        return " ".join(self.name.split()[1:]).upper()

    @property
    def short_name(self) -> str:
        parts = self.name.split()
        if len(parts) == 1:
            return self.name
        return f"{parts[0][0]}. {' '.join(parts[1:])}"


PROJECT_MANAGERS: List[ProjectManager] = [
    ProjectManager("Ahmed Al-Dajani"),
    ProjectManager("Akin Uslucan"),
    ProjectManager("Aleksandar Semi", weekly_target=40.0),
    ProjectManager("Chahid Belkarim"),
    ProjectManager("Heinz-Willi Hegger"),
    ProjectManager("Juri Bergheim", weekly_target=40.0),
    ProjectManager("Markus Manderla"),
    ProjectManager("Peter Takacs", weekly_target=40.0),
    ProjectManager("Ralf Jansen"),
    ProjectManager("Rishabh Khari"),
    ProjectManager("Tobias Radek"),
    ProjectManager("Udo Ditges"),
    ProjectManager("Yvonne Yu"),
]

_BY_NAME: Dict[str, ProjectManager] = {pm.name: pm for pm in PROJECT_MANAGERS}


def find_manager(name: str) -> Optional[ProjectManager]:
    return _BY_NAME.get(name)


def weekly_target(name: str, overrides: Optional[Dict[str, float]] = None) -> float:
    if overrides and name in overrides:
        return float(overrides[name])
    manager = find_manager(name)
    return manager.weekly_target if manager else DEFAULT_WEEKLY_TARGET


def hourly_rate(name: str, overrides: Optional[Dict[str, float]] = None) -> float:
    if overrides and name in overrides:
        return float(overrides[name])
    manager = find_manager(name)
    return manager.hourly_rate if manager else DEFAULT_HOURLY_RATE


def seed_accounts() -> List[dict]:
    return [
        {
            "username": pm.username,
            "password": pm.initial_password,
            "full_name": pm.name,
            "role": "admin" if pm.name == ADMIN_NAME else "user",
        }
        for pm in PROJECT_MANAGERS
    ]
