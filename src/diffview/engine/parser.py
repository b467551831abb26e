"""Unified diff parsing into the JSON diff model."""

import logging
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEV_NULL = "/dev/null"

LINE_INSERT = "insert"
LINE_DELETE = "delete"
LINE_CONTEXT = "context"


@dataclass
class DiffLine:
    """A single line inside a hunk."""

    type: str
    content: str
    oldNumber: Optional[int] = None
    newNumber: Optional[int] = None


@dataclass
class DiffBlock:
    """A hunk: header plus the lines it covers."""

    header: str
    oldStartLine: int
    newStartLine: int
    lines: List[DiffLine] = field(default_factory=list)


@dataclass
class DiffFile:
    """A file section of a unified diff."""

    oldName: str = ""
    newName: str = ""
    language: str = ""
    isNew: bool = False
    isDeleted: bool = False
    isRename: bool = False
    isCopy: bool = False
    isBinary: bool = False
    oldMode: Optional[str] = None
    newMode: Optional[str] = None
    checksumBefore: Optional[str] = None
    checksumAfter: Optional[str] = None
    addedLines: int = 0
    deletedLines: int = 0
    blocks: List[DiffBlock] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DiffParser:
    """Parses unified diff text into ``DiffFile`` records."""

    def __init__(self):
        """Initialize diff parser."""
        self.hunk_header_pattern = re.compile(
            r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@"
        )
        self.git_header_pattern = re.compile(r'^diff --git "?a/(.+?)"? "?b/(.+?)"?$')
        self.index_pattern = re.compile(r"^index ([0-9a-fA-F]+)\.\.([0-9a-fA-F]+)(?: (\d+))?")
        self.binary_pattern = re.compile(r"^Binary files (.+) and (.+) differ$")

    def parse(self, raw_diff: str) -> List[DiffFile]:
        """Parse a whole diff, possibly spanning many files."""
        files: List[DiffFile] = []
        current_file: Optional[DiffFile] = None
        current_block: Optional[DiffBlock] = None
        seen_file_header = False
        old_line = new_line = 0
        old_remaining = new_remaining = 0

        lines = raw_diff.replace("\r\n", "\n").split("\n")
        for index, line in enumerate(lines):
            if current_block is not None:
                if line.startswith("+") and new_remaining > 0:
                    current_block.lines.append(
                        DiffLine(type=LINE_INSERT, content=line, newNumber=new_line)
                    )
                    current_file.addedLines += 1
                    new_line += 1
                    new_remaining -= 1
                elif line.startswith("-") and old_remaining > 0:
                    current_block.lines.append(
                        DiffLine(type=LINE_DELETE, content=line, oldNumber=old_line)
                    )
                    current_file.deletedLines += 1
                    old_line += 1
                    old_remaining -= 1
                elif line.startswith(" ") or (line == "" and old_remaining and new_remaining):
                    current_block.lines.append(
                        DiffLine(
                            type=LINE_CONTEXT,
                            content=line or " ",
                            oldNumber=old_line,
                            newNumber=new_line,
                        )
                    )
                    old_line += 1
                    new_line += 1
                    old_remaining -= 1
                    new_remaining -= 1
                elif line.startswith("\\"):
                    # "\ No newline at end of file" belongs to the previous line
                    pass
                else:
                    current_block = None

                if current_block is not None:
                    if old_remaining <= 0 and new_remaining <= 0:
                        current_block = None
                    continue

            if line.startswith("diff "):
                current_file = self._start_file(files, line)
                seen_file_header = False
                continue

            next_line = lines[index + 1] if index + 1 < len(lines) else ""
            if line.startswith("--- ") and next_line.startswith("+++ "):
                if current_file is None or current_file.blocks or seen_file_header:
                    current_file = self._start_file(files, None)
                seen_file_header = True
                current_file.oldName = self._strip_path(line[4:])
                if current_file.oldName == DEV_NULL:
                    current_file.isNew = True
                continue

            if line.startswith("+++ ") and current_file is not None:
                current_file.newName = self._strip_path(line[4:])
                if current_file.newName == DEV_NULL:
                    current_file.isDeleted = True
                continue

            header_match = self.hunk_header_pattern.match(line)
            if header_match:
                if current_file is None:
                    current_file = self._start_file(files, None)
                old_line = int(header_match.group(1))
                new_line = int(header_match.group(3))
                old_remaining = int(header_match.group(2) or "1")
                new_remaining = int(header_match.group(4) or "1")
                current_block = DiffBlock(
                    header=line,
                    oldStartLine=old_line,
                    newStartLine=new_line,
                )
                current_file.blocks.append(current_block)
                if old_remaining <= 0 and new_remaining <= 0:
                    current_block = None
                continue

            if current_file is not None:
                self._apply_extended_header(current_file, line)

        for diff_file in files:
            self._finalize(diff_file)

        logger.debug("Parsed unified diff into %s files", len(files))
        return files

    def _start_file(self, files: List[DiffFile], git_header: Optional[str]) -> DiffFile:
        diff_file = DiffFile()
        if git_header:
            match = self.git_header_pattern.match(git_header)
            if match:
                diff_file.oldName = match.group(1)
                diff_file.newName = match.group(2)
        files.append(diff_file)
        return diff_file

    def _apply_extended_header(self, diff_file: DiffFile, line: str) -> None:
        """Record git extended header lines on the current file."""
        if line.startswith("new file mode "):
            diff_file.isNew = True
            diff_file.newMode = line[len("new file mode "):].strip()
        elif line.startswith("deleted file mode "):
            diff_file.isDeleted = True
            diff_file.oldMode = line[len("deleted file mode "):].strip()
        elif line.startswith("old mode "):
            diff_file.oldMode = line[len("old mode "):].strip()
        elif line.startswith("new mode "):
            diff_file.newMode = line[len("new mode "):].strip()
        elif line.startswith("rename from "):
            diff_file.isRename = True
            diff_file.oldName = line[len("rename from "):]
        elif line.startswith("rename to "):
            diff_file.isRename = True
            diff_file.newName = line[len("rename to "):]
        elif line.startswith("copy from "):
            diff_file.isCopy = True
            diff_file.oldName = line[len("copy from "):]
        elif line.startswith("copy to "):
            diff_file.isCopy = True
            diff_file.newName = line[len("copy to "):]
        elif line.startswith("index "):
            match = self.index_pattern.match(line)
            if match:
                diff_file.checksumBefore = match.group(1)
                diff_file.checksumAfter = match.group(2)
                if match.group(3):
                    diff_file.oldMode = diff_file.oldMode or match.group(3)
                    diff_file.newMode = diff_file.newMode or match.group(3)
        elif line.startswith("Binary files ") or line == "GIT binary patch":
            diff_file.isBinary = True
            match = self.binary_pattern.match(line)
            if match:
                old_path = self._strip_path(match.group(1))
                new_path = self._strip_path(match.group(2))
                diff_file.oldName = diff_file.oldName or old_path
                diff_file.newName = diff_file.newName or new_path
                if old_path == DEV_NULL:
                    diff_file.isNew = True
                if new_path == DEV_NULL:
                    diff_file.isDeleted = True

    def _finalize(self, diff_file: DiffFile) -> None:
        if diff_file.isNew:
            diff_file.oldName = DEV_NULL
        if diff_file.isDeleted:
            diff_file.newName = DEV_NULL
        name = diff_file.newName if diff_file.newName != DEV_NULL else diff_file.oldName
        diff_file.language = self._language(name)

    @staticmethod
    def _strip_path(raw: str) -> str:
        """Drop quoting, timestamps, and the a/ b/ prefixes from a header path."""
        path = raw.split("\t", 1)[0].strip()
        if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
            path = path[1:-1]
        if path.startswith(("a/", "b/")):
            path = path[2:]
        return path

    @staticmethod
    def _language(name: str) -> str:
        base = name.rsplit("/", 1)[-1]
        if "." not in base:
            return ""
        return base.rsplit(".", 1)[-1]
