"""Everything the skill says, in one place."""

from __future__ import annotations

from typing import Iterable, Sequence

from app.schemas.plants import HealthReport
from app.services.plant_status import PlantWateringStatus, WateringReport

WELCOME = (
    "Welcome to Plant Ranger Check! I can help you check the health of your plants. "
    'Just say "check my plant health" to get started.'
)
WELCOME_REPROMPT = (
    'You can say "check my plant health" to check your plant status, '
    'or "help" for more information.'
)

HELP = (
    "Plant Ranger Check can help you monitor your plant health. "
    'You can say "check my plant health" to get a status update, '
    '"list my plant status" to see which plants need water, '
    'or "check plants in" followed by a team name to check a specific team. '
    'You can also say "stop" to end the session.'
)
HELP_REPROMPT = (
    'What would you like to do? You can say "check my plant health", '
    '"list my plant status", "check plants in" followed by a team name, '
    'or "help" for more information.'
)

GOODBYE = "Goodbye! Take care of your plants!"

LINK_ACCOUNT_HEALTH = (
    "To check your plant health, you need to link your Plant Ranger account first. "
    "Please visit the Alexa app to complete the account linking process."
)
LINK_ACCOUNT_STATUS = (
    "To check your plant status, you need to link your Plant Ranger account first. "
    "Please visit the Alexa app to complete the account linking process."
)

NO_TEAMS = (
    "You don't have any teams set up yet. "
    "Please add a team in the Plant Ranger app first."
)
NO_PLANTS = (
    "You don't have any plants set up yet. "
    "Please add plants to your teams in the Plant Ranger app."
)

ASK_TEAM = "Which team would you like to check? Please tell me the name of the team or group."
ASK_TEAM_REPROMPT = (
    'Please say the name of the team you want to check, for example '
    '"check plants in kitchen" or "what plants need water in office".'
)

FALLBACK = (
    "I didn't understand. Try saying \"what plants need water in\" followed by your "
    'team name, or "list my plant status" to see all plants.'
)
FALLBACK_REPROMPT = 'Say "what plants need water in" followed by your team name.'

NOT_UNDERSTOOD = "I didn't understand that. Please try again."
UNSUPPORTED_REQUEST = "Sorry, I can't handle that kind of request."
APOLOGY = (
    "Sorry, I encountered an error while processing your request. "
    "Please try again later."
)
HEALTH_UNAVAILABLE = (
    "Sorry, I couldn't check your plant health right now. Please try again later."
)
STATUS_UNAVAILABLE = (
    "Sorry, I couldn't retrieve your plant status right now. Please try again later."
)
TEAM_STATUS_UNAVAILABLE = (
    "Sorry, I couldn't retrieve the plant status for that team right now. "
    "Please try again later."
)

HEALTH_CARD_TITLE = "Plant Health Check"
STATUS_CARD_TITLE = "Plant Status"


def _names(plants: Iterable[PlantWateringStatus]) -> str:
    return ", ".join(plant.name for plant in plants)


def _count_need(count: int) -> str:
    return f"{count} plant needs" if count == 1 else f"{count} plants need"


def _count_are(count: int) -> str:
    return f"{count} plant is" if count == 1 else f"{count} plants are"


def health_speech(report: HealthReport) -> str:
    return f"Your plant health status is: {report.status}. {report.message}"


def health_card_content(report: HealthReport) -> str:
    lines = [f"Status: {report.status}", report.message]
    if report.recommendations:
        lines.append("Recommendations:")
        lines.extend(f"- {item}" for item in report.recommendations)
    lines.append(f"Last checked: {report.last_checked:%Y-%m-%d %H:%M} UTC")
    return "\n".join(lines)


def all_plants_speech(report: WateringReport) -> str:
    """Only the plants needing water are named."""
    thirsty = report.needing_water
    if thirsty:
        return f"{_count_need(len(thirsty))} water: {_names(thirsty)}"
    total = len(report.plants)
    return (
        f"None of your {_count_need(total)} water right now. "
        "All your plants are doing fine!"
    )


def team_speech(team_name: str, report: WateringReport) -> str:
    total = len(report.plants)
    thirsty = report.needing_water
    fine = report.doing_fine
    message = f"In {team_name}, you have {total} plant{'' if total == 1 else 's'}. "
    if thirsty:
        message += f"{_count_need(len(thirsty))} water: {_names(thirsty)}"
        if fine:
            message += f". {_count_are(len(fine))} doing fine: {_names(fine)}"
        return message
    return message + f"All plants in {team_name} are doing fine! {_names(fine)}"


def watering_card_content(report: WateringReport) -> str:
    thirsty = report.needing_water
    detail = (
        f"Plants needing water: {_names(thirsty)}" if thirsty else "All plants are doing well!"
    )
    return f"Total Plants: {len(report.plants)}\nNeeds Water: {len(thirsty)}\n{detail}"


def team_card_title(team_name: str) -> str:
    return f"{STATUS_CARD_TITLE} - {team_name}"


def team_without_plants(team_name: str) -> str:
    return f"The {team_name} team doesn't have any plants set up yet."


def team_plants_unavailable(team_name: str) -> str:
    return f"I couldn't retrieve the plant details for {team_name}. Please try again later."


def team_missing(team_name: str) -> str:
    return f"I couldn't find the {team_name} team in Plant Ranger anymore. Please check the app."


def team_not_found(spoken: str, team_names: Sequence[str]) -> tuple[str, str]:
    names = ", ".join(team_names)
    return (
        f'I couldn\'t find a team named "{spoken}". Your available teams are: {names}. '
        "Please try again with one of these team names.",
        f"Which team would you like to check? Your teams are: {names}.",
    )


def team_ambiguous(spoken: str, team_names: Sequence[str]) -> tuple[str, str]:
    names = ", ".join(team_names)
    return (
        f'More than one team matches "{spoken}": {names}. Which one did you mean?',
        f"Which team would you like to check? Matching teams are: {names}.",
    )


def fallback_with_teams(team_names: Sequence[str]) -> tuple[str, str]:
    names = ", ".join(team_names)
    return (
        "I didn't quite understand. Which team would you like to check? "
        f"Your teams are: {names}. Please say something like \"check plants in\" "
        "followed by the team name.",
        f"Which team? Your teams are: {names}.",
    )


__all__ = [
    "APOLOGY",
    "ASK_TEAM",
    "ASK_TEAM_REPROMPT",
    "FALLBACK",
    "FALLBACK_REPROMPT",
    "GOODBYE",
    "HEALTH_CARD_TITLE",
    "HEALTH_UNAVAILABLE",
    "HELP",
    "HELP_REPROMPT",
    "LINK_ACCOUNT_HEALTH",
    "LINK_ACCOUNT_STATUS",
    "NOT_UNDERSTOOD",
    "NO_PLANTS",
    "NO_TEAMS",
    "STATUS_CARD_TITLE",
    "STATUS_UNAVAILABLE",
    "TEAM_STATUS_UNAVAILABLE",
    "UNSUPPORTED_REQUEST",
    "WELCOME",
    "WELCOME_REPROMPT",
    "all_plants_speech",
    "fallback_with_teams",
    "health_card_content",
    "health_speech",
    "team_ambiguous",
    "team_card_title",
    "team_missing",
    "team_not_found",
    "team_plants_unavailable",
    "team_speech",
    "team_without_plants",
    "watering_card_content",
]
