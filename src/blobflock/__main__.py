from blobflock.cli import main

main()
