"""Provider configure hook: build the MIRA client for a session."""

from mira_provider.config import Settings
from mira_provider.integrations.mira import ClientConfig, MiraClient


def configure_client(settings: Settings) -> MiraClient:
    """Create the session client; missing credentials or user agent fail here."""

    config = ClientConfig(
        username=settings.mira_username,
        password=settings.mira_password,
        user_agent=settings.terraform_useragent_mira,
        base_url=settings.mira_base_url,
        timeout_seconds=settings.mira_timeout_seconds,
    )
    return MiraClient(
        config=config,
        assignment_mode=settings.mira_assignment_mode,
        mask_source=settings.mira_mask_source,
        assigned_subnet_mask=settings.mira_assigned_subnet_mask,
    )
