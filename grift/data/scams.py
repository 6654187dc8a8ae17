"""Scam definitions — the Tier 1 "Small Time" catalog."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ResourceType(Enum):
    """What a scam pays out in."""

    MONEY = "money"
    BOTS = "bots"            # compounding resource
    REPUTATION = "reputation"
    CRYPTO = "crypto"


@dataclass(frozen=True)
class ScamDef:
    """Static definition of a scam. Never mutated at runtime."""

    id: str
    name: str
    tier: int                      # 1 (Small Time) … 5 (Mastermind)
    base_duration: int             # ms before any modifiers
    base_reward: float
    resource_type: ResourceType
    description: str = ""
    unlock_cost: float | None = None   # None = free to start


# ── Tier 1 ──────────────────────────────────────────────────────

# The foundational scam: free, fast, and pays in bots instead of money.
BOT_FARMS = ScamDef(
    id="bot-farms",
    name="Bot Farms",
    tier=1,
    base_duration=1_000,
    base_reward=1,
    resource_type=ResourceType.BOTS,
    description="Deploy autonomous bots to do your bidding",
)

NIGERIAN_PRINCE_EMAILS = ScamDef(
    id="nigerian-prince-emails",
    name="Nigerian Prince Emails",
    tier=1,
    base_duration=5_000,
    base_reward=15,
    resource_type=ResourceType.MONEY,
    description="A modest sum to secure millions from a deposed prince",
    unlock_cost=100,
)

FAKE_LOTTERY_WINNINGS = ScamDef(
    id="fake-lottery-winnings",
    name="Fake Lottery Winnings",
    tier=1,
    base_duration=3_000,
    base_reward=10,
    resource_type=ResourceType.MONEY,
    description="Congratulations! You've won! (Just pay the processing fee)",
    unlock_cost=150,
)

IPHONE_POPUP = ScamDef(
    id="iphone-popup",
    name="\"You've Won an iPhone\" Popups",
    tier=1,
    base_duration=2_000,
    base_reward=5,
    resource_type=ResourceType.MONEY,
    description="You are the 1,000,000th visitor! Definitely not a lie",
    unlock_cost=200,
)

PHISHING_LINKS = ScamDef(
    id="phishing-links",
    name="Phishing Links",
    tier=1,
    base_duration=4_000,
    base_reward=12,
    resource_type=ResourceType.MONEY,
    description="Your account has been compromised! Click here to verify",
    unlock_cost=300,
)

SURVEY_SCAMS = ScamDef(
    id="survey-scams",
    name="Survey Scams",
    tier=1,
    base_duration=6_000,
    base_reward=18,
    resource_type=ResourceType.MONEY,
    description="Complete 47 surveys for a chance to win absolutely nothing",
    unlock_cost=500,
)

FAKE_ANTIVIRUS_POPUPS = ScamDef(
    id="fake-antivirus-popups",
    name="Fake Antivirus Popups",
    tier=1,
    base_duration=3_500,
    base_reward=14,
    resource_type=ResourceType.MONEY,
    description="WARNING: 847 viruses detected! Download TotallyLegitAV now",
    unlock_cost=750,
)

GIFT_CARD_SCAMS = ScamDef(
    id="gift-card-scams",
    name="Gift Card Scams",
    tier=1,
    base_duration=7_000,
    base_reward=25,
    resource_type=ResourceType.MONEY,
    description="The IRS accepts Steam gift cards now. Totally legit policy",
    unlock_cost=1_000,
)

ADVANCE_FEE_FRAUD = ScamDef(
    id="advance-fee-fraud",
    name="Advance Fee Fraud",
    tier=1,
    base_duration=8_000,
    base_reward=35,
    resource_type=ResourceType.MONEY,
    description="Guaranteed 500% returns! Small registration fee required",
    unlock_cost=2_000,
)

FAKE_JOB_POSTINGS = ScamDef(
    id="fake-job-postings",
    name="Fake Job Postings",
    tier=1,
    base_duration=10_000,
    base_reward=50,
    resource_type=ResourceType.MONEY,
    description="Work from home! Be your own boss! (Training fee: $299)",
    unlock_cost=5_000,
)


# ── Registry ─────────────────────────────────────────────────────

FOUNDATIONAL_SCAM_ID = BOT_FARMS.id

TIER_1_SCAMS: tuple[ScamDef, ...] = (
    BOT_FARMS,
    NIGERIAN_PRINCE_EMAILS,
    FAKE_LOTTERY_WINNINGS,
    IPHONE_POPUP,
    PHISHING_LINKS,
    SURVEY_SCAMS,
    FAKE_ANTIVIRUS_POPUPS,
    GIFT_CARD_SCAMS,
    ADVANCE_FEE_FRAUD,
    FAKE_JOB_POSTINGS,
)

ALL_SCAMS: dict[str, ScamDef] = {s.id: s for s in TIER_1_SCAMS}
