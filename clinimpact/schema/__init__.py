from clinimpact.schema.params import ScenarioParams, SimulationParams

__all__ = ["ScenarioParams", "SimulationParams"]
