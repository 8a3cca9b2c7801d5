"""Output events, MIDI endpoints and the output system."""