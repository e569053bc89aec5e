from wpengine_mcp.mcp_server import main

main()
