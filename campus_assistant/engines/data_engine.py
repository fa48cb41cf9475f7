"""
Data Engine - Campus Data Source
Source of truth the offline cache syncs from. Ships with fixed mock data;
swap in another CampusDataSource to read from a live backend.
"""
import copy
from abc import ABC, abstractmethod
from typing import Any, Dict

CATEGORIES = ("schedule", "bus", "cafeteria", "event", "faq")

MOCK_DATA: Dict[str, Any] = {
    "schedule": {
        "today": [
            {"time": "08:00", "name": "Math 101", "location": "Room A"},
            {"time": "10:00", "name": "Physics 201", "location": "Room B"},
            {"time": "13:30", "name": "Computer Science 150", "location": "Lab 3"},
        ],
        "tomorrow": [
            {"time": "09:00", "name": "Chemistry 110", "location": "Room C"},
            {"time": "14:00", "name": "English 120", "location": "Room A"},
        ],
    },
    "bus": {
        "nextBuses": [
            {"route": "A", "time": "09:00", "destination": "Downtown"},
            {"route": "B", "time": "09:30", "destination": "Campus"},
            {"route": "A", "time": "10:15", "destination": "Downtown"},
        ],
        "routes": [
            {"name": "A", "description": "Downtown to Campus"},
            {"name": "B", "description": "Campus to Downtown"},
        ],
    },
    "cafeteria": {
        "today": {"breakfast": ["Eggs", "Toast"], "lunch": ["Rice", "Curry"], "dinner": ["Noodles"]},
        "tomorrow": {"breakfast": ["Pancakes"], "lunch": ["Pasta"], "dinner": ["Soup"]},
        "hours": {"breakfast": "7-9am", "lunch": "12-2pm", "dinner": "6-8pm"},
    },
    "event": {
        "upcoming": [
            {"date": "6/1", "name": "Workshop", "location": "Hall 1", "time": "10:00"},
            {"date": "6/15", "name": "Career Seminar", "location": "Auditorium", "time": "14:00"},
        ],
        "categories": ["Workshop", "Seminar"],
        "registration": {"required": ["Workshop"], "link": "https://example.com/register"},
    },
    "faq": [
        {"question": "Where is the library?", "answer": "The library is next to the main hall."},
        {"question": "How do I get a student card?", "answer": "Visit the student services counter in Block A."},
    ],
}


class CampusDataSource(ABC):
    @abstractmethod
    async def fetch(self, category: str) -> Any:
        """Return the current payload for one category."""


class MockCampusData(CampusDataSource):
    def __init__(self, data: Dict[str, Any] = None):
        self.data = data if data is not None else MOCK_DATA

    async def fetch(self, category: str) -> Any:
        if category not in self.data:
            raise KeyError(f"No campus data for category '{category}'")
        # Callers get their own copy so cached snapshots never alias the source
        return copy.deepcopy(self.data[category])
