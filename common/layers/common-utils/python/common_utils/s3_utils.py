"""Utilities for walking S3 bucket listings."""

from typing import Any, Dict, Iterator, Optional

__all__ = ["iter_s3_objects"]


def iter_s3_objects(
    client: Any, bucket: str, prefix: Optional[str] = None
) -> Iterator[Dict[str, Any]]:
    """Yield every ``Contents`` entry of ``bucket`` across all result pages.

    Parameters
    ----------
    client : boto3 S3 client
        Client used to build the ``list_objects_v2`` paginator.
    bucket : str
        Bucket to list.
    prefix : str, optional
        Restrict the listing to keys beginning with ``prefix``.
    """
    params: Dict[str, Any] = {"Bucket": bucket}
    if prefix:
        params["Prefix"] = prefix
    paginator = client.get_paginator("list_objects_v2")
    for page in paginator.paginate(**params):
        for obj in page.get("Contents", []):
            yield obj
