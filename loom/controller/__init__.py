"""Command and event channels, UI snapshots and the central controller."""