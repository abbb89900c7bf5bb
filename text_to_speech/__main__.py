from text_to_speech.cli import main

main()
