#!/usr/bin/env python3
# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Generate a service table module from a C++ SDK client source file.

The client source carries each operation's HTTP method, request URI, required
members, host prefix and signer, along with the service's signing name. It does
not carry the endpoint prefix, protocol, API version or JSON target prefix, so
those are passed on the command line. Query and header bindings live in the
request model sources and have to be added to the generated rows by hand.
"""

import argparse
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

PROJECT_ROOT_DIR = Path(__file__).resolve().parent.parent.parent
SERVICES_DIR = PROJECT_ROOT_DIR / "src" / "aws_service_clients" / "services"

PROTOCOLS = {
    "restJson1": "REST_JSON",
    "awsJson1_0": "AWS_JSON_1_0",
    "awsJson1_1": "AWS_JSON_1_1",
    "awsQuery": "AWS_QUERY",
}

LINE_LENGTH = 88

_OPERATION = re.compile(
    r"^\w+Outcome (?P<client>\w+)::(?P<name>\w+)\(const \w+Request& request\) const\n"
    r"\{\n(?P<body>.*?)^\}",
    re.MULTILINE | re.DOTALL,
)
_SERVICE_NAME = re.compile(r'::SERVICE_NAME = "([^"]+)";')
_REQUIRED = re.compile(r"if \(!request\.(\w+)HasBeenSet\(\)\)")
_PATH_CALL = re.compile(
    r'AddPathSegments\("(?P<literal>[^"]*)"\)'
    r"|AddPathSegment\((?:\w+Mapper::GetNameFor\w+\()?request\.Get(?P<label>\w+)\(\)"
)
_QUERY = re.compile(r'ss\.str\("(\?[^"]*)"\)')
_HOST_PREFIX = re.compile(r'AddPrefixIfMissing\("([^"]*)"\)')
_METHOD = re.compile(r"MakeRequest\(request, .*?HttpMethod::HTTP_(\w+)(?P<signer>.*)\)\);")


@dataclass
class OperationRow:
    name: str
    http_method: str = "POST"
    request_uri: str = "/"
    required: list[str] = field(default_factory=list)
    host_prefix: str | None = None
    signed: bool = True

    def render(self) -> str:
        args = [f'"{self.name}"']
        if self.required or self.request_uri != "/":
            args += [f'"{self.http_method}"', f'"{self.request_uri}"']
        elif self.http_method != "POST":
            args.append(f'"{self.http_method}"')
        args += [f'"{member}"' for member in self.required]
        if self.host_prefix:
            args.append(f'host_prefix="{self.host_prefix}"')
        if not self.signed:
            args.append("signed=False")

        indent = " " * 8
        line = f"{indent}op({', '.join(args)}),"
        if len(line) <= LINE_LENGTH:
            return line
        inner = "".join(f"{indent}    {arg},\n" for arg in args)
        return f"{indent}op(\n{inner}{indent}),"


@dataclass
class ClientSource:
    class_name: str
    signing_name: str
    operations: list[OperationRow]


def parse_request_uri(body: str) -> str:
    segments: list[str] = []
    trailing_slash = False
    for match in _PATH_CALL.finditer(body):
        if (label := match.group("label")) is not None:
            segments.append(f"{{{label}}}")
            trailing_slash = False
        else:
            literal = match.group("literal")
            segments.extend(part for part in literal.split("/") if part)
            trailing_slash = literal.endswith("/") and literal != "/"

    path = "/" + "/".join(segments)
    if trailing_slash and segments:
        path += "/"
    if query := _QUERY.search(body):
        path += query.group(1)
    return path


def parse_operation(name: str, body: str) -> OperationRow | None:
    method = _METHOD.search(body)
    if method is None:
        # Requests sent to a URL taken from a member, such as an SQS queue URL.
        return None
    host_prefix = _HOST_PREFIX.search(body)
    return OperationRow(
        name=name,
        http_method=method.group(1),
        request_uri=parse_request_uri(body),
        required=_REQUIRED.findall(body),
        host_prefix=host_prefix.group(1) if host_prefix else None,
        signed="NULL_SIGNER" not in method.group("signer"),
    )


def parse_client_source(source: str) -> ClientSource:
    signing_name = _SERVICE_NAME.search(source)
    if signing_name is None:
        raise ValueError("No SERVICE_NAME found in client source")

    class_name = ""
    operations: list[OperationRow] = []
    for match in _OPERATION.finditer(source):
        class_name = match.group("client")
        row = parse_operation(match.group("name"), match.group("body"))
        if row is not None:
            operations.append(row)

    if not operations:
        raise ValueError("No operations found in client source")
    operations.sort(key=lambda row: row.name)
    return ClientSource(class_name, signing_name.group(1), operations)


def render_module(
    client: ClientSource,
    *,
    service_name: str,
    endpoint_prefix: str,
    protocol: str,
    api_version: str,
    target_prefix: str | None = None,
) -> str:
    lines = [
        "#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.",
        "#  SPDX-License-Identifier: Apache-2.0",
        f'"""{service_name}."""',
        "",
        "from ..client import ServiceClient",
        "from ..model import Protocol, ServiceModel, op",
        "",
        "SERVICE_MODEL = ServiceModel(",
        f'    service_name="{service_name}",',
        f'    endpoint_prefix="{endpoint_prefix}",',
    ]
    if client.signing_name != endpoint_prefix:
        lines.append(f'    signing_name="{client.signing_name}",')
    lines += [
        f"    protocol=Protocol.{PROTOCOLS[protocol]},",
        f'    api_version="{api_version}",',
    ]
    if target_prefix:
        lines.append(f'    target_prefix="{target_prefix}",')
    lines.append("    operations=[")
    lines += [row.render() for row in client.operations]
    lines += [
        "    ],",
        ")",
        "",
        "",
        f"class {client.class_name}(ServiceClient):",
        "    SERVICE_MODEL = SERVICE_MODEL",
        "",
    ]
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(
        description="Generate a service table from a C++ SDK client source file"
    )
    parser.add_argument("source", type=Path, help="Path to the *Client.cpp file")
    parser.add_argument("--service-name", required=True, help="The service id")
    parser.add_argument(
        "--endpoint-prefix",
        required=True,
        help="First label of the service's regional host names",
    )
    parser.add_argument("--protocol", choices=tuple(PROTOCOLS), required=True)
    parser.add_argument("--api-version", required=True)
    parser.add_argument("--target-prefix", help="X-Amz-Target prefix of JSON services")
    parser.add_argument(
        "-m",
        "--module",
        help="Module name under the services package. Prints to stdout if omitted.",
    )
    args = parser.parse_args()

    client = parse_client_source(args.source.read_text())
    module = render_module(
        client,
        service_name=args.service_name,
        endpoint_prefix=args.endpoint_prefix,
        protocol=args.protocol,
        api_version=args.api_version,
        target_prefix=args.target_prefix,
    )

    if args.module is None:
        sys.stdout.write(module)
        return

    output = SERVICES_DIR / f"{args.module}.py"
    with open(output, "w") as f:
        f.write(module)
    print(f"Wrote {len(client.operations)} operations to {output}")


if __name__ == "__main__":
    main()
