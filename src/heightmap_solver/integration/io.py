"""Data loading for elevation maps."""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from heightmap_solver.core.data_models import HeightMap, GridParseError

logger = logging.getLogger(__name__)


def split_rows(text: str) -> List[str]:
    """Split map text into rows.

    Handles both ``\\n`` and ``\\r\\n`` line endings and drops trailing
    blank lines. Blank lines inside the block are kept so that the
    parser reports them as ragged rows.
    """
    rows = [line.rstrip('\r') for line in text.split('\n')]
    while rows and not rows[-1].strip():
        rows.pop()
    return rows


def parse_height_map(text: str) -> HeightMap:
    """Parse a block of elevation labels into a HeightMap.

    Args:
        text: One row of labels per line

    Returns:
        Parsed HeightMap

    Raises:
        GridParseError: If the text does not describe a valid map
    """
    return HeightMap.build(split_rows(text))


def load_height_map(file_path: Union[str, Path]) -> HeightMap:
    """Load a HeightMap from a text file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        GridParseError: If the file content is malformed
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Height map file not found: {file_path}")

    with open(file_path, 'r') as f:
        text = f.read()

    try:
        height_map = parse_height_map(text)
    except GridParseError as e:
        logger.error(f"Failed to parse {file_path}: {e}")
        raise

    logger.debug(f"Loaded {height_map.width}x{height_map.height} map from {file_path}")
    return height_map


def find_map_files(input_path: Union[str, Path],
                   max_files: Optional[int] = None,
                   pattern: str = '*.txt') -> List[Path]:
    """Find height map files in a directory.

    Args:
        input_path: Directory to search, or a single map file
        max_files: Maximum number of files to return
        pattern: Glob pattern for map files

    Returns:
        Sorted list of map file paths
    """
    input_path = Path(input_path)

    if input_path.is_file():
        return [input_path]

    if input_path.is_dir():
        map_files = sorted(input_path.rglob(pattern))
        return map_files[:max_files] if max_files is not None else map_files

    raise FileNotFoundError(f"Input path not found: {input_path}")


def iter_height_maps(input_path: Union[str, Path],
                     skip_invalid: bool = True) -> Iterator[Tuple[Path, HeightMap]]:
    """Iterate over all maps under ``input_path``.

    Args:
        input_path: Directory or single file
        skip_invalid: Whether to skip malformed maps or raise errors

    Yields:
        Tuples of (file path, HeightMap)
    """
    for map_file in find_map_files(input_path):
        try:
            yield map_file, load_height_map(map_file)
        except GridParseError as e:
            if skip_invalid:
                logger.warning(f"Skipping invalid map {map_file}: {e}")
                continue
            raise
