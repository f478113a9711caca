from pagewise.mcp.client import PagewiseClient
from pagewise.mcp.server import create_mcp_server


def test_mcp_server_name(client):
    pw = PagewiseClient(client)
    mcp = create_mcp_server(pw)
    assert mcp.name == "pagewise"
