# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Change Description: smart_open kept for "-" (stdout/stdin) support; added JSON
# read/write helpers used by the token list store.

import contextlib
import json
import pathlib
import sys
from typing import IO, Any, Generator, Union


# https://stackoverflow.com/questions/17602878/how-to-handle-both-with-open-and-sys-stdout-nicely
@contextlib.contextmanager
def smart_open(
    filename: Union[str, pathlib.Path],
    mode: str = "w",
    create_parent_dirs: bool = True,
) -> Generator[IO[Any], None, None]:
    if str(filename) == "-":
        # Yield the system stream directly, closing it would close stdout/stdin.
        yield sys.stdout if "w" in mode else sys.stdin
        return

    path = pathlib.Path(filename)
    if create_parent_dirs and "w" in mode:
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, mode, encoding="utf-8") as fh:
        yield fh


def read_json(filename: Union[str, pathlib.Path]) -> Any:
    with smart_open(filename, "r") as fh:
        return json.load(fh)


def write_json(filename: Union[str, pathlib.Path], data: Any) -> None:
    # Compact output, the published lists are fetched by wallets and explorers
    with smart_open(filename, "w") as fh:
        fh.write(json.dumps(data, ensure_ascii=False, separators=(",", ":")))
