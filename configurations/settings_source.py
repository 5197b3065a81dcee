# configurations/settings_source.py
"""
Source site addresses and request identity.
"""

from dataclasses import dataclass


@dataclass
class SourceSiteConfig:
    """
    URL templates for the ksi.is pages the ingestion reads.
    """

    base_url: str = "https://www.ksi.is"
    competition_listing_path: str = "/oll-mot/"
    competition_path: str = "/oll-mot/mot"
    match_path: str = "/leikir-og-urslit/felagslid/leikur"
    player_path: str = "/leikmenn/leikmadur"

    # ***> Identifying header sent with every request <***
    user_agent_product: str = "Mozilla/5.0"
    user_agent_client: str = "ksi-match-data"
    accept_language: str = "is,en;q=0.8"

    def user_agent(self, script_name: str = "") -> str:
        """
        Build the identifying User-Agent value, e.g.
        ``Mozilla/5.0 (ksi-match-data; scrape-report)``.
        """
        if script_name:
            return f"{self.user_agent_product} ({self.user_agent_client}; {script_name})"
        return f"{self.user_agent_product} ({self.user_agent_client})"
