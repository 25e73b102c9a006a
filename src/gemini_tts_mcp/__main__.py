from gemini_tts_mcp.cli import main

raise SystemExit(main())
