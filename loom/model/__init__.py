"""Projects, timelines, tracks, media containers and endpoint configurations."""