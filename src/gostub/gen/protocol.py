"""protocol.py - JSON requests in, generated code out.

for editors and other tools that hold the files in memory. the input
is a stream of JSON objects (concatenated or one per line); every
request gets one response line. when the request names a file, test
files next to the output path count as existing tests, as for `gen`:

    {"inputFilePath": "add.go", "inputFile": "package add ...",
     "outputFilePath": "add_test.go", "outputFile": "",
     "comment": "", "lines": [3], "functions": [], "all": false}

    {"generatedCode": "package add\n..."}
"""

import json
from dataclasses import dataclass, field
from typing import Callable, TextIO

from gostub.errors import UsageError
from gostub.gen.codegen import default_output, read_sibling_tests, run
from gostub.gen.selector import SelectionCriteria, check_function_name
from gostub.log import span


@dataclass
class Request:
    input_file_path: str = ""
    output_file_path: str = ""
    input_file: str = ""
    output_file: str = ""
    comment: str = ""
    lines: list[int] = field(default_factory=list)
    functions: list[str] = field(default_factory=list)
    all: bool | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Request":
        if not isinstance(data, dict):
            raise UsageError(f"request must be a JSON object, got: {type(data).__name__}")
        lines = data.get("lines") or []
        if not isinstance(lines, list) or not all(isinstance(n, int) and not isinstance(n, bool) and n >= 0 for n in lines):
            raise UsageError(f"lines must be unsigned ints, got: {lines}")
        functions = data.get("functions") or []
        if not isinstance(functions, list):
            raise UsageError(f"functions must be a list of names, got: {functions!r}")
        return cls(
            input_file_path=data.get("inputFilePath", ""),
            output_file_path=data.get("outputFilePath", ""),
            input_file=data.get("inputFile", ""),
            output_file=data.get("outputFile", ""),
            comment=data.get("comment", ""),
            lines=list(lines),
            functions=[check_function_name(f) for f in functions],
            all=data.get("all"),
        )


@dataclass
class Response:
    generated_code: str = ""

    def to_dict(self) -> dict:
        return {"generatedCode": self.generated_code}


def handle(request: Request, test_template: str | None = None,
           normalize: Callable[[str, str], str] | None = None) -> Response:
    """one request, one response. errors propagate."""
    input_path = request.input_file_path or "source.go"
    output_path = request.output_file_path or default_output(input_path)
    siblings = []
    if request.input_file_path or request.output_file_path:
        siblings = read_sibling_tests(output_path)

    with span("request", subsystem="protocol", filename=input_path):
        result = run(
            SelectionCriteria.build(request.lines, request.functions, request.all),
            request.input_file,
            request.output_file or None,
            filename=input_path,
            test_filename=output_path,
            siblings=siblings,
            comment=request.comment,
            test_template=test_template,
        )
        code = result.code
        if code and normalize is not None:
            code = normalize(output_path, code)
        return Response(generated_code=code)


def decode_requests(text: str) -> list[Request]:
    """split a stream of JSON objects into requests."""
    decoder = json.JSONDecoder()
    requests = []
    pos = 0
    while True:
        while pos < len(text) and text[pos].isspace():
            pos += 1
        if pos >= len(text):
            return requests
        try:
            data, pos = decoder.raw_decode(text, pos)
        except json.JSONDecodeError as e:
            raise UsageError(f"malformed request: {e}") from e
        requests.append(Request.from_dict(data))


def serve(reader: TextIO, writer: TextIO, test_template: str | None = None,
          normalize: Callable[[str, str], str] | None = None) -> int:
    """answer every request on reader. returns how many were served."""
    requests = decode_requests(reader.read())
    for request in requests:
        response = handle(request, test_template, normalize)
        writer.write(json.dumps(response.to_dict()) + "\n")
        writer.flush()
    return len(requests)
