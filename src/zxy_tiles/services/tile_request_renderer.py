from zxy_tiles.interfaces.tile_server import ITileRequestRenderer
from zxy_tiles.models.tile_server import TileAddress, TileRequest, TileServer
from zxy_tiles.utils.file_utils import FileUtils


class TileRequestRenderer(ITileRequestRenderer):
    """Renders tile addresses into request URLs and output paths"""

    def __init__(self, server: TileServer, output_dir: str = '.'):
        self.server = server
        self.output_dir = output_dir

    def render(self, address: TileAddress) -> TileRequest:
        """Pure function of the address; performs no I/O"""
        url = self.server.get_tile_url(address.zoom, address.x, address.y)
        path = FileUtils.get_tile_path(self.output_dir, address.zoom, address.x, address.y)
        return TileRequest(url=url, destination_path=path, address=address)
