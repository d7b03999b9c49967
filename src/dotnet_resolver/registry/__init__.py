"""Remote collaborators: release metadata feed, git tags, install scripts.

- release_index.py: releases-index.json and per-channel releases.json
- git_tags.py: tag list of the SDK repository via git ls-remote
- install_script.py: dotnet-install script download with an on-disk cache
"""
