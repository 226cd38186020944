"""Literal bodies written into generated workspaces.

Each body embeds the marker its patch checks for, so a second run of the
same generator recognises its own output.
"""

from __future__ import annotations

import json

from studiovault.config import JSON_MARKER, MARKER_TEXT

WEB_CONFIG_MARKER = f"// {MARKER_TEXT}"
API_ENTRY_MARKER = "StudioVault API Worker"
CRON_ENTRY_MARKER = "StudioVault Cron Worker"


def worker_tsconfig(scope: str) -> str:
    """``tsconfig.json`` shared by HTTP and cron workers."""
    return f"""{{
  {JSON_MARKER},
  "extends": "{scope}/typescript-config/base.json",

  "compilerOptions": {{
    "types": ["./worker-configuration.d.ts"]
  }},

  "include": ["worker-configuration.d.ts", "src/**/*.ts"],
  "exclude": ["test"]
}}
"""


def next_config(scope: str, packages: tuple[str, ...]) -> str:
    """``next.config.ts`` that transpiles the shared workspace packages."""
    listed = ",\n".join(f'    "{pkg}"' for pkg in packages)
    return f"""import type {{ NextConfig }} from "next";

{WEB_CONFIG_MARKER}
const nextConfig: NextConfig = {{
  /**
   * Workspace packages ({scope}/*) must be transpiled explicitly.
   */
  transpilePackages: [
{listed}
  ],
}};

export default nextConfig;
"""


def api_entry(name: str, scope: str) -> str:
    """``src/index.ts`` exporting a zero-argument ``fetch`` handler."""
    return f"""import {{ slugify }} from "{scope}/utils";
import type {{ ApiResponse }} from "{scope}/types";

export default {{
  async fetch(): Promise<Response> {{
    const value = slugify("{API_ENTRY_MARKER}: {name}");

    const body: ApiResponse<string> = {{
      success: true,
      data: value
    }};

    return Response.json(body);
  }}
}};
"""


def cron_entry(name: str, cron: str, scope: str) -> str:
    """``src/index.ts`` exporting a zero-argument ``scheduled`` handler."""
    return f"""import {{ slugify }} from "{scope}/utils";

export default {{
  /**
   * {CRON_ENTRY_MARKER}
   */
  // Schedule: {cron}
  async scheduled(): Promise<void> {{
    const name = slugify("{name}");
    console.log("Cron tick from:", name);

    // Implement the scheduled job here.
  }}
}};
"""


def cron_triggers_member(cron: str) -> str:
    """Top-level ``"triggers"`` member holding a single cron expression."""
    return f'"triggers": {{\n    "crons": [{json.dumps(cron)}]\n  }}'
