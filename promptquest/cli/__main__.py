from promptquest.cli.main import main

main()
