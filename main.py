# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import uvicorn

from careshare.app import app

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
