"""Rendering of the quote request confirmation email."""
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from src.app.config import NotificationSettings
from src.app.core.domain.models import QuoteRequest

TEMPLATE_DIR = Path(__file__).resolve().parents[2] / "templates"

HTML_TEMPLATE = "email/quote_request_confirmation.html"
TEXT_TEMPLATE = "email/quote_request_confirmation.txt"


class QuoteEmailRenderer:
    """
    Renders the confirmation email bodies for a quote request.

    Every submitted field is attacker-controlled, so the HTML template is
    rendered with autoescaping on; the plain-text alternative is not escaped.
    Rendering has no side effects and depends only on its inputs.
    """

    def __init__(self, branding: NotificationSettings, template_dir: Path = TEMPLATE_DIR):
        """
        Initialize the renderer.

        Args:
            branding: Company name, address and logo content-id shown in the email
            template_dir: Directory containing the email/ templates
        """
        self.branding = branding
        self._env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
        )

    def _context(self, quote_request: QuoteRequest) -> dict:
        return {
            "quote": quote_request,
            "company_name": self.branding.company_name,
            "company_tagline": self.branding.company_tagline,
            "company_address": self.branding.company_address,
            "logo_cid": self.branding.logo_cid,
            "year": quote_request.created_at.year,
        }

    def render_html(self, quote_request: QuoteRequest) -> str:
        """Render the HTML body, referencing the logo by content-id."""
        return self._env.get_template(HTML_TEMPLATE).render(**self._context(quote_request))

    def render_text(self, quote_request: QuoteRequest) -> str:
        """Render the plain-text alternative body."""
        return self._env.get_template(TEXT_TEMPLATE).render(**self._context(quote_request))
