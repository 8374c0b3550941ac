#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from urllib.parse import quote as urlquote


def join_query_params(params: list[tuple[str, str | None]], prefix: str = "") -> str:
    """Join a list of query parameter key-value tuples.

    Parameters with a value of ``None`` are written as a bare key.

    :param params: The list of key-value query parameter tuples.
    :param prefix: An optional query prefix, written verbatim.
    """
    query: str = prefix
    for key, value in params:
        if query:
            query += "&"
        if value is None:
            query += urlquote(key, safe="")
        else:
            query += f"{urlquote(key, safe='')}={urlquote(value, safe='')}"
    return query
