from pb_ui.cli.main import main

main()
