"""Clocks, event scheduling and the playback engine."""