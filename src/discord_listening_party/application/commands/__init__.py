"""
Application Commands

Command objects for every party operation, the replies they produce, and the
dispatcher that routes one to the other.
"""

from discord_listening_party.application.commands.dispatcher import CommandDispatcher
from discord_listening_party.application.commands.party_commands import (
    Actor,
    CastVoteCommand,
    EnterCommand,
    ExitCommand,
    KickCommand,
    ListParticipantsCommand,
    PartyCommand,
    SessionEndCommand,
    SessionStartCommand,
    VoteEndCommand,
    VoteNextCommand,
    VoteStartCommand,
)
from discord_listening_party.application.commands.responses import ResponseIntent, VoteOption

__all__ = [
    "Actor",
    "PartyCommand",
    # Session
    "SessionStartCommand",
    "SessionEndCommand",
    # Playback
    "VoteStartCommand",
    "VoteNextCommand",
    "VoteEndCommand",
    # Roster
    "EnterCommand",
    "ExitCommand",
    "KickCommand",
    "ListParticipantsCommand",
    # Voting
    "CastVoteCommand",
    # Dispatch
    "CommandDispatcher",
    "ResponseIntent",
    "VoteOption",
]
