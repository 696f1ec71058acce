# Vault - Record Search
#
# Case-insensitive substring filter over title, username and website.
# Pure filter: order is preserved and matches are not ranked.

from typing import List, Optional, Sequence

from .models import CredentialRecord


def matches_query(record: CredentialRecord, query: Optional[str]) -> bool:
    """True if the query is a case-folded substring of a searchable field."""
    if not query:
        return True

    needle = query.casefold()
    if needle in record.title.casefold():
        return True
    if needle in record.username.casefold():
        return True
    return bool(record.website) and needle in record.website.casefold()


def filter_records(
    records: Sequence[CredentialRecord],
    query: Optional[str],
) -> List[CredentialRecord]:
    """Records matching the query, in their original order."""
    return [r for r in records if matches_query(r, query)]
