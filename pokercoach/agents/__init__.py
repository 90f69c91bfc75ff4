"""
PokerCoach Agents - Bot Policies

The engine drives bot seats through the BotPolicy interface; the default
opponent is WeightedRandomPolicy.
"""

from pokercoach.agents.base import BotDecision, BotPolicy
from pokercoach.agents.random_agent import CallingPolicy, WeightedRandomPolicy

__all__ = ["BotDecision", "BotPolicy", "CallingPolicy", "WeightedRandomPolicy"]
