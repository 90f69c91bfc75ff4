"""
Coaching layer: host session, timers, records, storage and coaches.
"""

from pokercoach.coach.advisor import Coach, OfflineCoach, RemoteCoach
from pokercoach.coach.records import (
    CardModel,
    HandRecord,
    LogEntryModel,
    SkillAssessment,
    SkillLevel,
    TrainingProfile,
)
from pokercoach.coach.session import GameSession, SessionConfig
from pokercoach.coach.storage import JsonFileStore, KeyValueStore, MemoryStore
from pokercoach.coach.timer import DeferredTask

__all__ = [
    "Coach",
    "OfflineCoach",
    "RemoteCoach",
    "CardModel",
    "HandRecord",
    "LogEntryModel",
    "SkillAssessment",
    "SkillLevel",
    "TrainingProfile",
    "GameSession",
    "SessionConfig",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "DeferredTask",
]
