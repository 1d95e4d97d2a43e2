"""Resources whose local state is backed up before sync overwrites it."""

SETTINGS = 'settings'
KEYBINDINGS = 'keybindings'
SNIPPETS = 'snippets'
EXTENSIONS = 'extensions'
GLOBAL_STATE = 'globalState'

ALL_RESOURCE_KEYS = (SETTINGS, KEYBINDINGS, SNIPPETS, EXTENSIONS, GLOBAL_STATE)
