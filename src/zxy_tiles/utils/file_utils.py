import os


class FileUtils:
    """Utility class for file operations"""

    @staticmethod
    def ensure_directory_exists(directory_path: str) -> None:
        """Create directory if it doesn't exist; safe to race"""
        os.makedirs(directory_path, exist_ok=True)

    @staticmethod
    def get_tile_directory(output_dir: str, zoom: int, x: int) -> str:
        """Directory holding every y tile of one (zoom, x) column"""
        return os.path.join(output_dir, str(zoom), str(x))

    @staticmethod
    def get_tile_path(output_dir: str, zoom: int, x: int, y: int) -> str:
        """Generate tile file path, output_dir/zoom/x/y.png"""
        return os.path.join(FileUtils.get_tile_directory(output_dir, zoom, x), f"{y}.png")

    @staticmethod
    def remove_file(file_path: str) -> None:
        """Remove a file if present"""
        if os.path.exists(file_path):
            os.remove(file_path)
