"""
Reconciliation of DNS records against the current public IP
"""
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, List, Optional

from .dns.base import APIError, DNSError, DNSRecord, ResponseError
from .dns.cloudflare import CloudflareClient
from .ip.address import ResolvedIP
from .utils import default_comment


class OutcomeStatus(Enum):
    """Per-name reconciliation result"""

    UP_TO_DATE = "up_to_date"  # Record already points at the address
    UPDATED = "updated"  # Record was rewritten
    NOT_FOUND = "not_found"  # No record with that name in the zone
    FAILED = "failed"  # Provider rejected or could not be reached


class FailurePolicy(Enum):
    """What to do when a record update fails"""

    ABORT = "abort"  # Stop the run on the first failed update
    CONTINUE = "continue"  # Record the failure and reconcile the remaining names


@dataclass
class RecordOutcome:
    """
    Outcome for one desired record name

    Attributes:
        name: Desired record name.
        status: What happened to it.
        record: Record as written (UPDATED) or as found (UP_TO_DATE, FAILED).
        previous_address: Address before the update (UPDATED, FAILED).
        errors: Provider errors, verbatim (FAILED).
        error: Exception that caused the failure (FAILED).
    """

    name: str
    status: OutcomeStatus
    record: Optional[DNSRecord] = None
    previous_address: Optional[str] = None
    errors: List[ResponseError] = field(default_factory=list)
    error: Optional[Exception] = None

    def is_failure(self) -> bool:
        return self.status == OutcomeStatus.FAILED


@dataclass
class ReconcileReport:
    """Ordered outcomes of one reconciliation run"""

    address: ResolvedIP
    outcomes: List[RecordOutcome] = field(default_factory=list)

    def by_status(self, status: OutcomeStatus) -> List[RecordOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def updated(self) -> List[RecordOutcome]:
        return self.by_status(OutcomeStatus.UPDATED)

    @property
    def up_to_date(self) -> List[RecordOutcome]:
        return self.by_status(OutcomeStatus.UP_TO_DATE)

    @property
    def not_found(self) -> List[RecordOutcome]:
        return self.by_status(OutcomeStatus.NOT_FOUND)

    @property
    def failed(self) -> List[RecordOutcome]:
        return self.by_status(OutcomeStatus.FAILED)

    @property
    def warnings(self) -> List[str]:
        return [f'Could not find DNS record with name "{o.name}".' for o in self.not_found]

    @property
    def ok(self) -> bool:
        """True when no update failed; missing names are only warnings"""
        return not self.failed


class ReconcileAborted(DNSError):
    """A record update failed and the failure policy stopped the run"""

    def __init__(self, report: ReconcileReport, outcome: RecordOutcome):
        super().__init__(f"Failed to update DNS record {outcome.name}: {outcome.error}")
        self.report = report
        self.outcome = outcome

    @property
    def cause(self) -> Optional[Exception]:
        return self.outcome.error

    @property
    def errors(self) -> List[ResponseError]:
        return self.outcome.errors


class Reconciler:
    """Diffs desired record names against the zone and applies minimal updates"""

    def __init__(
        self,
        client: CloudflareClient,
        comment: Optional[str] = None,
        failure_policy: FailurePolicy = FailurePolicy.ABORT,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            client: DNS provider client bound to the zone
            comment: Comment written on updated records; defaults to
                "Updated <UTC timestamp>" computed when the run starts
            failure_policy: Whether a failed update aborts the run
            logger: Logger for progress messages
        """
        self.client = client
        self.comment = comment
        self.failure_policy = failure_policy
        self.logger = logger or logging.getLogger(__name__)

    def reconcile(self, desired_names: Iterable[str], resolved_ip: ResolvedIP) -> ReconcileReport:
        """
        Point every desired record name at the resolved IP

        Args:
            desired_names: Record names to reconcile, processed in order
            resolved_ip: Current public IP address

        Returns:
            ReconcileReport with one outcome per distinct name

        Raises:
            DNSError: If the records could not be listed; nothing is updated
            ReconcileAborted: If an update failed under FailurePolicy.ABORT
        """
        records = self.client.list_records()
        comment = self.comment if self.comment is not None else default_comment()
        report = ReconcileReport(address=resolved_ip)

        seen = set()
        for name in desired_names:
            if name in seen:
                continue
            seen.add(name)

            outcome = self._reconcile_name(name, records, resolved_ip, comment)
            report.outcomes.append(outcome)

            if outcome.is_failure() and self.failure_policy == FailurePolicy.ABORT:
                raise ReconcileAborted(report, outcome)

        return report

    def _reconcile_name(self, name: str, records: List[DNSRecord],
                        resolved_ip: ResolvedIP, comment: str) -> RecordOutcome:
        record = select_record(name, records, resolved_ip.record_type)
        if record is None:
            self.logger.warning(f'Could not find DNS record with name "{name}".')
            return RecordOutcome(name=name, status=OutcomeStatus.NOT_FOUND)

        if record.address == resolved_ip.address:
            self.logger.info(f'IP address for "{name}" is already up to date.')
            return RecordOutcome(name=name, status=OutcomeStatus.UP_TO_DATE, record=record)

        updated = replace(
            record,
            address=resolved_ip.address,
            type=resolved_ip.record_type,
            comment=comment,
        )
        self.logger.info(f'Updating IP address from "{record.address}" to "{resolved_ip.address}".')
        try:
            self.client.update_record(updated)
        except DNSError as e:
            errors = e.errors if isinstance(e, APIError) else []
            self.logger.error(f"Failed to update DNS record {name}: {str(e)}")
            return RecordOutcome(
                name=name,
                status=OutcomeStatus.FAILED,
                record=record,
                previous_address=record.address,
                errors=errors,
                error=e,
            )

        self.logger.info(f'IP address for "{name}" updated.')
        return RecordOutcome(
            name=name,
            status=OutcomeStatus.UPDATED,
            record=updated,
            previous_address=record.address,
        )


def select_record(name: str, records: List[DNSRecord], record_type: str) -> Optional[DNSRecord]:
    """
    Find the record to reconcile for a name

    Names are matched exactly. When several records share the name, the one
    whose type matches the address family wins, otherwise the first one.
    """
    matches = [r for r in records if r.name == name]
    if not matches:
        return None
    for record in matches:
        if record.type == record_type:
            return record
    return matches[0]
