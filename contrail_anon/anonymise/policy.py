from typing import List, Sequence

from contrail_anon.common.constants import KEEP_PREFIXES, STOP_HASH_NAMES, STOP_HASH_PREFIXES
from contrail_anon.common.utils import hash_value, is_uuid, to_bytes


def _stops_hashing(segment: str) -> bool:
    return segment.startswith(STOP_HASH_PREFIXES) or segment in STOP_HASH_NAMES


def _is_kept(segment: str) -> bool:
    return segment.startswith(KEEP_PREFIXES) or is_uuid(segment)


def hash_fq_name_segments(segments: Sequence[str]) -> List[str]:
    """
    Hash the segments of a fq_name.

    fq_names look like:
        [domain, project, name, uuid]
        [domain, project, name, name]
        [domain, project, uuid]
        [domain, project]
        [uuid]

    System resources (target*, default-project, default-global-system-config)
    must keep their name for the database to work after a restore, so hashing
    stops at the first of them. Uuids and default*/ingress*/egress* names are
    left as is.

    :param segments: fq_name segments, without the trailing uuid of the fq_name table columns
    :return: new list of segments
    """
    result = list(segments)
    for idx, segment in enumerate(result):
        if _stops_hashing(segment):
            break

        if not _is_kept(segment):
            result[idx] = hash_value(to_bytes(segment))

    return result
