# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration loading for ftc-helper.

Settings come from built-in defaults, an optional YAML file
(~/.ftc-helper.yaml or --config), environment variables and command-line
flags, merged once into an immutable HelperConfig.

Public API:

- load_config: Resolve the effective configuration
- dump_config: Render a configuration as YAML
- HelperConfig: The resolved settings

Example:
    Basic usage:

        from ftchelper.config import load_config

        config = load_config()
        print(config.work_dir)  # /home/alex/StudioProjects

"""

from .loader import HelperConfig, dump_config, load_config

__all__ = ["HelperConfig", "dump_config", "load_config"]
