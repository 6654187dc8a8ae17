"""Crew definitions — hireable employees and one-time managers per scam."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EmployeeDef:
    """A countable helper that speeds up and/or sweetens one scam."""

    id: str
    name: str
    scam_id: str          # scam this employee works on
    base_cost: float
    speed_boost: float    # per employee, 0.03 = 3% faster
    reward_boost: float   # per employee, 0.05 = 5% more reward


@dataclass(frozen=True)
class ManagerDef:
    """A one-time hire that runs a scam without manual triggering."""

    id: str
    name: str
    scam_id: str
    cost: float
    flavor_text: str = ""


# ── Employees ────────────────────────────────────────────────────

TIER_1_EMPLOYEES: tuple[EmployeeDef, ...] = (
    EmployeeDef("bot-wrangler", "Bot Wrangler", "bot-farms", 50, 0.03, 0.05),
    EmployeeDef("email-copywriter", "Email Copywriter", "nigerian-prince-emails", 100, 0.02, 0.08),
    EmployeeDef("lottery-announcer", "Lottery Announcer", "fake-lottery-winnings", 120, 0.04, 0.06),
    EmployeeDef("popup-designer", "Popup Designer", "iphone-popup", 80, 0.05, 0.04),
    EmployeeDef("domain-spoofer", "Domain Spoofer", "phishing-links", 150, 0.03, 0.07),
    EmployeeDef("survey-bot-operator", "Survey Bot Operator", "survey-scams", 180, 0.04, 0.06),
    EmployeeDef("fear-monger", "Fear Monger", "fake-antivirus-popups", 140, 0.03, 0.07),
    EmployeeDef("gift-card-reseller", "Gift Card Reseller", "gift-card-scams", 200, 0.02, 0.08),
    EmployeeDef("trust-builder", "Trust Builder", "advance-fee-fraud", 250, 0.02, 0.09),
    EmployeeDef("resume-faker", "Resume Faker", "fake-job-postings", 300, 0.02, 0.10),
)

ALL_EMPLOYEES: dict[str, EmployeeDef] = {e.id: e for e in TIER_1_EMPLOYEES}


# ── Managers ─────────────────────────────────────────────────────

TIER_1_MANAGERS: tuple[ManagerDef, ...] = (
    ManagerDef(
        "bot-3000", "B0T-3000", "bot-farms", 500,
        "BEEP BOOP. AUTOMATION PROTOCOL ENGAGED.",
    ),
    ManagerDef(
        "prince-okonkwo", "Prince Okonkwo III", "nigerian-prince-emails", 1_000,
        "I am the REAL prince, unlike those other 47,000 imposters.",
    ),
    ManagerDef(
        "lucky-larry", "Lucky Larry Lotto", "fake-lottery-winnings", 1_200,
        "CONGRATULATIONS! You're our millionth viewer! I say that a lot.",
    ),
    ManagerDef(
        "popup-pete", "Popup Pete", "iphone-popup", 1_500,
        "YOU WON! CLICK HERE! NO WAIT, HERE!",
    ),
    ManagerDef(
        "phishmaster-phil", "PhishMaster Phil", "phishing-links", 2_000,
        "The extra 'l' in 'Paypall' is for 'legitimate'.",
    ),
    ManagerDef(
        "survey-susan", "Survey Susan", "survey-scams", 3_000,
        "Just 47 more questions and you'll win that gift card!",
    ),
    ManagerDef(
        "dread-norton", "Dread Norton", "fake-antivirus-popups", 4_000,
        "WARNING! Your computer has 847 VIRUSES!",
    ),
    ManagerDef(
        "gwen-cardsworth", "Gwen Cardsworth", "gift-card-scams", 6_000,
        "Yes, the IRS DOES accept gift cards now. Very official.",
    ),
    ManagerDef(
        "felix-upfront", "Felix Upfront", "advance-fee-fraud", 10_000,
        "Your inheritance is ready! Just a small processing fee first.",
    ),
    ManagerDef(
        "carla-careers", "Carla Careers", "fake-job-postings", 25_000,
        "Make $10,000/week from HOME stuffing envelopes!",
    ),
)

ALL_MANAGERS: dict[str, ManagerDef] = {m.id: m for m in TIER_1_MANAGERS}


def employees_for_scam(scam_id: str) -> list[EmployeeDef]:
    """All employee types that work on *scam_id*."""
    return [e for e in TIER_1_EMPLOYEES if e.scam_id == scam_id]


def manager_for_scam(scam_id: str) -> ManagerDef | None:
    """The manager that automates *scam_id*, if any."""
    for m in TIER_1_MANAGERS:
        if m.scam_id == scam_id:
            return m
    return None
