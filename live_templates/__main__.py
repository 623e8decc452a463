from live_templates.cli import main

main()
