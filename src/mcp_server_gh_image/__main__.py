from mcp_server_gh_image import main

main()
