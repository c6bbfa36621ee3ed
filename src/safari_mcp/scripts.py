"""JXA programs run through ``osascript -l JavaScript``.

Every program receives the application name as ``argv[0]`` and 1-based
indices as strings. Values are returned as JSON text on stdout; anything
logged with ``console.log`` goes to stderr.
"""

_PRELUDE = """
function win(app, idx) { return app.windows[parseInt(idx, 10) - 1] }
function tab(app, w, t) { return win(app, w).tabs[parseInt(t, 10) - 1] }
"""


def _program(body: str) -> str:
    return f"{_PRELUDE}\nfunction run(argv) {{\n  var app = Application(argv[0])\n{body}\n}}\n"


WINDOW_COUNT = _program("  return JSON.stringify(app.windows.length)")

# Calling the specifier forces the lookup, which throws for a missing window.
PROBE_WINDOW = _program("  win(app, argv[1])()\n  return JSON.stringify(true)")

TAB_COUNT = _program("  return JSON.stringify(win(app, argv[1]).tabs.length)")

CURRENT_TAB_INDEX = _program("  return JSON.stringify(win(app, argv[1]).currentTab().index())")

TAB_INFO = _program(
    """  var t = tab(app, argv[1], argv[2])()
  return JSON.stringify({title: t.name() || '', url: t.url() || '', active: t.visible()})"""
)

# One round trip for the whole collection. Windows whose current tab cannot be
# read report activeTab null and no tabs.
SNAPSHOT = _program(
    """  var out = [], wins = app.windows
  for (var i = 0; i < wins.length; i++) {
    var w = wins[i], active
    try {
      active = w.currentTab().index()
    } catch (e) {
      out.push({index: i + 1, activeTab: null, tabs: []})
      continue
    }
    var names = w.tabs.name(), urls = w.tabs.url(), tabs = []
    for (var j = 0; j < names.length; j++) {
      tabs.push({title: names[j] || '', url: urls[j] || ''})
    }
    out.push({index: i + 1, activeTab: active, tabs: tabs})
  }
  return JSON.stringify(out)"""
)

CLOSE_WINDOW = _program("  win(app, argv[1]).close()")

CLOSE_TAB = _program("  tab(app, argv[1], argv[2]).close()")

SET_CURRENT_TAB = _program(
    """  var w = win(app, argv[1])
  w.currentTab = tab(app, argv[1], argv[2])"""
)

CREATE_WINDOW = _program(
    """  var doc = app.Document().make()
  doc.url = argv[1]"""
)

SET_WINDOW_URL = _program("  win(app, argv[1]).currentTab.url = argv[2]")

# Dereference first: hiding a window moves it, so "window N" would change target.
TOGGLE_VISIBILITY = _program(
    """  var w = win(app, argv[1])()
  w.visible = false
  w.visible = true"""
)

ACTIVATE_APP = _program("  app.activate()")

IS_FRONTMOST = _program("  return JSON.stringify(app.frontmost())")

NEW_PRIVATE_WINDOW = _program(
    "  Application('System Events').keystroke('n', {using: ['command down', 'shift down']})"
)

EVALUATE_SCRIPT = _program(
    """  var result = app.doJavaScript(argv[3], {in: tab(app, argv[1], argv[2])})
  return JSON.stringify(result === undefined ? null : result)"""
)

# argv[0] is a JSON object mapping pasteboard type tags to strings.
PASTEBOARD_WRITE = """
ObjC.import('AppKit')

function run(argv) {
  var items = JSON.parse(argv[0]),
    pboard = $.NSPasteboard.generalPasteboard
  pboard.clearContents
  for (var key in items) {
    pboard.setStringForType($(items[key]), key)
  }
}
"""
