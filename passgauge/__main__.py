from passgauge.gui import main

main()
