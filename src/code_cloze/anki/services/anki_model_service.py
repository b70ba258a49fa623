"""Service for Anki model (note type) operations."""

from typing import cast

from code_cloze.anki import note_type
from code_cloze.domain.interfaces.anki_http_client import IAnkiHttpClient
from code_cloze.utils.logging import get_logger

logger = get_logger(__name__)


class AnkiModelService:
    """Service for Anki model (note type) operations.

    The cloze note type is treated as code: every call to
    :meth:`ensure_model` pushes the current template and styling,
    replacing whatever is stored in Anki.
    """

    def __init__(self, http_client: IAnkiHttpClient):
        self._http_client = http_client
        logger.debug("anki_model_service_initialized")

    def get_model_names(self) -> list[str]:
        """Get list of available note model names."""
        return cast("list[str]", self._http_client.invoke("modelNames"))

    def create_model(self, model_name: str) -> None:
        self._http_client.invoke(
            "createModel", note_type.create_model_params(model_name)
        )
        logger.info("note_type_created", model=model_name)

    def update_model(self, model_name: str) -> None:
        """Overwrite templates and styling of an existing model."""
        self._http_client.invoke(
            "updateModelTemplates",
            {"model": {"name": model_name, "templates": note_type.templates()}},
        )
        self._http_client.invoke(
            "updateModelStyling",
            {"model": {"name": model_name, "css": note_type.CARD_CSS}},
        )
        logger.debug("note_type_overwritten", model=model_name)

    def ensure_model(self, model_name: str) -> bool:
        """Create the model if missing, otherwise overwrite it.

        Returns:
            True if the model was created, False if it was updated
        """
        if model_name in (self.get_model_names() or []):
            self.update_model(model_name)
            return False
        self.create_model(model_name)
        return True
