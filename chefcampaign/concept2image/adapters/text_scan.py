"""
Adapter for the external OCR text-scan service.

The scanning service is run separately. It receives a full image as a data URL
and answers with the text regions it found, each a polygon and its text.
"""

from typing import Dict, Any, List, Optional

import requests

from chefcampaign.core.config import get_config_value
from chefcampaign.core.constants import DEFAULT_TEXT_SCAN_ENDPOINT
from chefcampaign.core.credentials import get_optional_api_key
from chefcampaign.core.error_handler import APIError, handle_api_request, log_api_error
from chefcampaign.core.logging_config import get_logger, log_api_request
from chefcampaign.core.utils import ensure_data_url
from chefcampaign.models import TextRegion

# Initialize logger
logger = get_logger(__name__)


class TextScanAdapter:
    """
    Client for the OCR text-scan service.
    """

    def __init__(self, endpoint: Optional[str] = None, api_key: Optional[str] = None):
        """
        Args:
            endpoint (str, optional): Scan URL. Defaults to ``text_scan.endpoint``.
            api_key (str, optional): Bearer key, read from TEXT_SCAN_API_KEY when omitted.
                The service may run without one.
        """
        self.endpoint = endpoint or get_config_value("text_scan.endpoint", DEFAULT_TEXT_SCAN_ENDPOINT)
        self.api_key = api_key or get_optional_api_key("text_scan")
        self.timeout = get_config_value("http.timeout")

        logger.info(f"Initialized {self.__class__.__name__} for {self.endpoint}")

    def scan_text(self, image_ref: str) -> List[TextRegion]:
        """
        Detect text regions in an image.

        Args:
            image_ref (str): Image reference; remote URLs are downloaded and sent inline

        Returns:
            List[TextRegion]: Detected regions in the order the service returned them

        Raises:
            APIError: If the service fails or answers with malformed records
        """
        payload = {"image": ensure_data_url(image_ref, timeout=self.timeout)}
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        log_api_request(logger, "Text scan", self.endpoint, payload)
        try:
            result = handle_api_request(
                requests.post,
                self.endpoint,
                payload,
                headers,
                error_message="Text scan service error",
                timeout=self.timeout
            )
        except APIError as e:
            log_api_error(e)
            raise

        regions = self.parse_regions(result)
        logger.info(f"Text scan found {len(regions)} regions")
        return regions

    def parse_regions(self, result: Any) -> List[TextRegion]:
        """
        Convert the service response into TextRegions.

        Accepts either a bare list of records or ``{"results": [...]}``.
        """
        records = result.get("results") if isinstance(result, dict) else result
        if not isinstance(records, list):
            raise APIError("Text scan response is not a list of regions", response=result, endpoint=self.endpoint)

        return [self._parse_record(record) for record in records]

    def _parse_record(self, record: Dict[str, Any]) -> TextRegion:
        try:
            box = [[float(x), float(y)] for x, y in record["box"]]
            text = record["text"]
        except (KeyError, TypeError, ValueError) as e:
            raise APIError(f"Malformed text region: {record}", endpoint=self.endpoint) from e

        if not isinstance(text, str):
            raise APIError(f"Malformed text region: {record}", endpoint=self.endpoint)
        return TextRegion(box=box, text=text)
