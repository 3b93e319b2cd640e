"""Check workflow: fetch, parse, evaluate, aggregate, format."""

import logging
import re
import time
from typing import Any

from .config.models import CheckConfig
from .engine.aggregator import aggregate
from .engine.evaluator import AttributeEvaluator
from .engine.formatter import OutputFormatter
from .services.document_parser import parse_document
from .services.http_client import DocumentFetcher, FetchResponse
from .utils.errors import CheckError, ContentTypeMismatch
from .utils.logger import setup_logger
from .utils.metrics import CheckOutcome


class CheckWorkflow:
    """
    Runs one check from a validated configuration.

    The configuration is validated before the workflow is built, so a
    configuration error never reaches the network.
    """

    def __init__(self, config: CheckConfig, logger: logging.Logger = None):
        """
        Initialize check workflow.

        Args:
            config: Validated check configuration
            logger: Optional logger instance
        """
        self.config = config
        self.logger = logger or setup_logger("workflow")

        self.fetcher = DocumentFetcher(
            url=config.url,
            timeout=config.timeout,
            verify=not config.ignoressl,
            metadata=config.metadata,
            accept=config.accept_header(),
            logger=self.logger
        )
        self.evaluator = AttributeEvaluator(self.logger)
        self.formatter = OutputFormatter(self.logger)

    async def run(self) -> CheckOutcome:
        """
        Execute the check.

        Returns:
            CheckOutcome: Overall status, message and perfdata. Fetch, content
            type and parse errors are turned into outcomes with their status.
        """
        start_time = time.time()

        try:
            response = await self.fetcher.fetch()
            self._check_content_type(response)
            root = parse_document(response.content, response.content_type)
        except CheckError as e:
            self.logger.warning(
                f"Check failed: {e}",
                extra={"error_type": type(e).__name__, "status": e.status.name}
            )
            return CheckOutcome(status=e.status, message=str(e))

        outcome = self.evaluate_document(root)

        self.logger.info(
            f"Check completed with {outcome.status.name}",
            extra={"duration_ms": round((time.time() - start_time) * 1000, 1)}
        )
        return outcome

    def evaluate_document(self, root: Any) -> CheckOutcome:
        """
        Evaluate a parsed document against the configured attributes.

        Args:
            root: Parsed document tree

        Returns:
            CheckOutcome: Overall status, message and perfdata
        """
        outcomes = self.evaluator.evaluate_all(root, self.config.attribute_specs())
        status = aggregate(outcomes)
        message, perfdata = self.formatter.format(
            outcomes,
            self.config.perf_fields(),
            self.config.output_fields(),
            root
        )
        return CheckOutcome(status=status, message=message, perfdata=perfdata)

    def _check_content_type(self, response: FetchResponse) -> None:
        """
        Reject responses whose Content-Type does not match the expected pattern.

        Raises:
            ContentTypeMismatch: If the content type does not match
        """
        content_type = response.content_type
        if not content_type or not re.search(self.config.contenttype, content_type, re.IGNORECASE):
            raise ContentTypeMismatch(f"Unexpected content type: {content_type or 'none'}")
