"""Project-level file templating.

Everything here is plain templating over the project model: app and page
json, the app script and stylesheet, sitemap and the fixed utils files.
"""

from typing import Any

from pagewright.core import safe_json_dumps
from pagewright.models import Page, Project
from pagewright.script import generate_app_script
from pagewright.script.data import data_entries
from pagewright.style import ThemeManager, format_rules
from pagewright.validation import is_builtin

WINDOW_DEFAULTS = {
    "navigationBarBackgroundColor": "#000000",
    "navigationBarTextStyle": "white",
    "backgroundColor": "#ffffff",
    "backgroundTextStyle": "dark",
    "enablePullDownRefresh": False,
}

TAB_BAR_DEFAULTS = {
    "color": "#000000",
    "selectedColor": "#07c160",
    "backgroundColor": "#ffffff",
}

PACK_IGNORE = [
    {"type": "file", "value": ".eslintrc.js"},
    {"type": "file", "value": ".gitignore"},
    {"type": "file", "value": "project.config.json"},
    {"type": "folder", "value": "node_modules"},
]

EDITOR_SETTINGS = {
    "urlCheck": True,
    "es6": True,
    "postcss": True,
    "minified": False,
    "newFeature": True,
    "coverView": True,
    "autoAudits": False,
    "checkInvalidKey": True,
    "checkSiteMap": True,
    "uploadWithSourceMap": True,
    "babelSetting": {"ignore": [], "disablePlugins": [], "outputPath": ""},
}

# project.config.json lists at most this many pages as launch conditions
CONDITION_PAGE_LIMIT = 5


def _dump(value: Any) -> str:
    return safe_json_dumps(value, indent=2) + "\n"


def component_path(name: str) -> str:
    return f"/components/{name}/{name}"


def generate_app_json(project: Project) -> str:
    window = {**WINDOW_DEFAULTS, "navigationBarTitleText": project.name}
    window.update(project.config.window.to_camel_dict())

    config: dict[str, Any] = {
        "pages": [page.path for page in project.pages],
        "window": window,
    }

    tab_bar = project.config.tab_bar
    if tab_bar is not None:
        config["tabBar"] = {**TAB_BAR_DEFAULTS, **tab_bar.to_camel_dict()}

    if project.global_components:
        config["usingComponents"] = {c.name: component_path(c.name) for c in project.global_components}
    if project.config.sub_packages:
        config["subPackages"] = [sub.to_camel_dict() for sub in project.config.sub_packages]
    if project.config.permission:
        config["permission"] = project.config.permission
    if project.config.network_timeout:
        config["networkTimeout"] = project.config.network_timeout
    if project.config.plugins:
        config["plugins"] = project.config.plugins
    config["debug"] = project.config.debug
    config["sitemapLocation"] = "sitemap.json"

    return _dump(config)


def generate_project_config_json(project: Project) -> str:
    config = {
        "description": project.description or f"{project.name} mini program",
        "packOptions": {"ignore": PACK_IGNORE},
        "setting": EDITOR_SETTINGS,
        "compileType": "miniprogram",
        "appid": project.app_id,
        "projectname": project.name,
        "simulatorType": "wechat",
        "condition": {
            "miniprogram": {
                "current": 0,
                "list": [
                    {"id": index, "name": page.name, "pathName": page.path, "query": ""}
                    for index, page in enumerate(project.pages[:CONDITION_PAGE_LIMIT])
                ],
            }
        },
    }
    return _dump(config)


def generate_sitemap_json() -> str:
    return _dump({"rules": [{"action": "allow", "page": "*"}]})


def used_components(page: Page) -> dict[str, str]:
    """Non-builtin component types on a page, in first-use order."""
    names: dict[str, str] = {}
    for node in page.walk():
        if node.type and not is_builtin(node.type) and node.type not in names:
            names[node.type] = component_path(node.type)
    return names


def generate_page_json(page: Page) -> str:
    config = {"navigationBarTitleText": page.name}
    config.update(page.config.to_camel_dict())
    using = {**used_components(page), **page.config.using_components}
    config.pop("usingComponents", None)
    if using:
        config["usingComponents"] = using
    return _dump(config)


def generate_app_js(project: Project) -> str:
    header = f"// {project.name}\n"
    return header + generate_app_script(data_entries(project.global_variables))


BASE_APP_STYLE = """page {
  height: 100%;
  background-color: #f5f5f5;
  box-sizing: border-box;
}

.container {
  padding: 20rpx;
  box-sizing: border-box;
}

.flex {
  display: flex;
}

.flex-column {
  flex-direction: column;
}

.flex-center {
  justify-content: center;
  align-items: center;
}
"""


def generate_app_wxss(project: Project, theme_manager: ThemeManager | None = None) -> str:
    """Base stylesheet, preceded by theme variables when the project names a theme."""
    parts = [f"/* {project.name} */"]
    if project.theme and theme_manager is not None and theme_manager.has_theme(project.theme):
        theme = theme_manager.get_theme(project.theme)
        parts.append(format_rules(theme_manager.generate_theme_rules(theme)))
    parts.append(BASE_APP_STYLE)
    return "\n\n".join(part.rstrip("\n") for part in parts) + "\n"


UTIL_JS = """function padZero(num) {
  return num < 10 ? '0' + num : '' + num
}

function formatTime(date, format = 'YYYY-MM-DD HH:mm:ss') {
  return format
    .replace('YYYY', date.getFullYear())
    .replace('MM', padZero(date.getMonth() + 1))
    .replace('DD', padZero(date.getDate()))
    .replace('HH', padZero(date.getHours()))
    .replace('mm', padZero(date.getMinutes()))
    .replace('ss', padZero(date.getSeconds()))
}

function debounce(fn, delay = 300) {
  let timer = null
  return function (...args) {
    if (timer) clearTimeout(timer)
    timer = setTimeout(() => fn.apply(this, args), delay)
  }
}

function throttle(fn, delay = 300) {
  let last = 0
  return function (...args) {
    const now = Date.now()
    if (now - last >= delay) {
      last = now
      fn.apply(this, args)
    }
  }
}

module.exports = {
  formatTime,
  padZero,
  debounce,
  throttle
}
"""

REQUEST_JS = """const BASE_URL = ''
const TIMEOUT = 10000

function request(options) {
  return new Promise((resolve, reject) => {
    wx.request({
      url: BASE_URL + options.url,
      method: options.method || 'GET',
      data: options.data || {},
      header: options.header || {},
      timeout: options.timeout || TIMEOUT,
      success: (res) => {
        if (res.statusCode >= 200 && res.statusCode < 300) {
          resolve(res.data)
        } else {
          reject(res)
        }
      },
      fail: reject
    })
  })
}

module.exports = {
  request,
  get: (url, data) => request({ url, data, method: 'GET' }),
  post: (url, data) => request({ url, data, method: 'POST' })
}
"""


def generate_util_files() -> dict[str, str]:
    return {"utils/util.js": UTIL_JS, "utils/request.js": REQUEST_JS}


__all__ = [
    "generate_app_json",
    "generate_project_config_json",
    "generate_sitemap_json",
    "generate_page_json",
    "generate_app_js",
    "generate_app_wxss",
    "generate_util_files",
    "used_components",
    "component_path",
]
