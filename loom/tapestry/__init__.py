"""Time positions, durations, tempo, note values and the tempo map."""