# Copyright 2026 PerfTimer Contributors
# SPDX-License-Identifier: Apache-2.0
